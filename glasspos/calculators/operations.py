"""
Edge-operation metadata: calculation methods (OperationCode), edge-finish
styles that key the rate table (OperationFamily), and their descriptors.

Labels here are presentation only. Business rules live in edge_formulas.py.
"""

import enum

from pydantic import BaseModel, ConfigDict, model_validator

from ..exceptions import UnknownOperation


class OperationCode(str, enum.Enum):
    """Calculation method — dispatch key into the formula registry."""

    STRAIGHT = "STRAIGHT"
    FRAME_HEAD = "FRAME_HEAD"
    TWO_FRAME_HEADS = "2_FRAME_HEADS"
    FRAME_SIDE = "FRAME_SIDE"
    TWO_FRAME_SIDES = "2_FRAME_SIDES"
    FRAME_HEAD_SIDE = "FRAME_HEAD_SIDE"
    TWO_FRAME_HEADS_SIDE = "2_FRAME_HEADS_SIDE"
    TWO_FRAME_SIDES_HEAD = "2_FRAME_SIDES_HEAD"
    FULL_FRAME = "FULL_FRAME"
    CIRCLE = "CIRCLE"
    CURVE_ARCH = "CURVE_ARCH"
    PANELS = "PANELS"

    @classmethod
    def parse(cls, value) -> "OperationCode":
        """Resolve a canonical code, enum member name, or legacy shataf/farma alias."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in cls.__members__:
            return cls[key]
        if key in LEGACY_ALIASES:
            return LEGACY_ALIASES[key]
        raise UnknownOperation(value)


# Older farma/shataf naming schemes encoded the same formulas under other names
LEGACY_ALIASES = {
    "NORMAL_SHATAF": OperationCode.STRAIGHT,
    "ONE_HEAD_FARMA": OperationCode.FRAME_HEAD,
    "TWO_HEAD_FARMA": OperationCode.TWO_FRAME_HEADS,
    "ONE_SIDE_FARMA": OperationCode.FRAME_SIDE,
    "TWO_SIDE_FARMA": OperationCode.TWO_FRAME_SIDES,
    "HEAD_SIDE_FARMA": OperationCode.FRAME_HEAD_SIDE,
    "TWO_HEAD_ONE_SIDE_FARMA": OperationCode.TWO_FRAME_HEADS_SIDE,
    "TWO_SIDE_ONE_HEAD_FARMA": OperationCode.TWO_FRAME_SIDES_HEAD,
    "FULL_FARMA": OperationCode.FULL_FRAME,
    "WHEEL_CUT": OperationCode.CIRCLE,
    "ROTATION": OperationCode.CURVE_ARCH,
    "TABLEAUX": OperationCode.PANELS,
}


class OperationDescriptor(BaseModel):
    """Read-only metadata for rendering operation pickers and labels."""

    model_config = ConfigDict(frozen=True)

    code: OperationCode
    english_name: str
    arabic_name: str
    formula: str
    is_manual: bool = False
    requires_diameter: bool = False

    @model_validator(mode="after")
    def _manual_never_needs_diameter(self):
        if self.is_manual and self.requires_diameter:
            raise ValueError(f"{self.code.value}: a manual operation cannot require a diameter")
        return self


OPERATION_DESCRIPTORS = {
    d.code: d for d in (
        OperationDescriptor(code=OperationCode.STRAIGHT, english_name="Straight edge",
                            arabic_name="عدل", formula="2 × (W + H)"),
        OperationDescriptor(code=OperationCode.FRAME_HEAD, english_name="One frame head",
                            arabic_name="فرما رأس 1", formula="(W × 2) + (H × 3)"),
        OperationDescriptor(code=OperationCode.TWO_FRAME_HEADS, english_name="Two frame heads",
                            arabic_name="فرما رأسين", formula="(W × 2) + (H × 4)"),
        OperationDescriptor(code=OperationCode.FRAME_SIDE, english_name="One frame side",
                            arabic_name="فرما جنب 1", formula="(W × 3) + (H × 2)"),
        OperationDescriptor(code=OperationCode.TWO_FRAME_SIDES, english_name="Two frame sides",
                            arabic_name="فرما جنبين", formula="(W × 4) + (H × 2)"),
        OperationDescriptor(code=OperationCode.FRAME_HEAD_SIDE, english_name="Frame head + side",
                            arabic_name="فرما رأس وجنب", formula="3 × (W + H)"),
        OperationDescriptor(code=OperationCode.TWO_FRAME_HEADS_SIDE, english_name="Two frame heads + side",
                            arabic_name="فرما رأسين وجنب", formula="(W × 3) + (H × 4)"),
        OperationDescriptor(code=OperationCode.TWO_FRAME_SIDES_HEAD, english_name="Two frame sides + head",
                            arabic_name="فرما جنبين ورأس", formula="(W × 4) + (H × 3)"),
        OperationDescriptor(code=OperationCode.FULL_FRAME, english_name="Full frame",
                            arabic_name="فرما كامل", formula="4 × (W + H)"),
        OperationDescriptor(code=OperationCode.CIRCLE, english_name="Circle (wheel)",
                            arabic_name="العجلة", formula="6 × D", requires_diameter=True),
        OperationDescriptor(code=OperationCode.CURVE_ARCH, english_name="Curve / arch (manual)",
                            arabic_name="الدوران (يدوي)", formula="manual", is_manual=True),
        OperationDescriptor(code=OperationCode.PANELS, english_name="Panels (manual)",
                            arabic_name="التابلوهات (يدوي)", formula="manual", is_manual=True),
    )
}


def describe_operation(code) -> OperationDescriptor:
    """Metadata for one operation code. Raises UnknownOperation."""
    return OPERATION_DESCRIPTORS[OperationCode.parse(code)]


def list_operations() -> list:
    return list(OPERATION_DESCRIPTORS.values())


# --- Edge-finish families (rate table keys) ---

class OperationFamily(str, enum.Enum):
    KHARZAN = "KHARZAN"
    CHAMBOURLIEH = "CHAMBOURLIEH"
    BEVEL_1_CM = "BEVEL_1_CM"
    BEVEL_2_CM = "BEVEL_2_CM"
    BEVEL_3_CM = "BEVEL_3_CM"
    JULIA = "JULIA"
    SANDING = "SANDING"
    LASER = "LASER"

    @classmethod
    def parse(cls, value) -> "OperationFamily":
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper()
        key = FAMILY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownOperation(value, kind="operation family") from None

    @property
    def config(self) -> "FamilyConfig":
        return FAMILY_CONFIG[self]


FAMILY_ALIASES = {
    "KHARAZAN": "KHARZAN",
    "SHAMBORLEH": "CHAMBOURLIEH",
    "ONE_CM": "BEVEL_1_CM",
    "TWO_CM": "BEVEL_2_CM",
    "THREE_CM": "BEVEL_3_CM",
}


class FamilyConfig(BaseModel):
    """How an edge-finish family is priced. Exactly one flag is set."""

    model_config = ConfigDict(frozen=True)

    english_name: str
    arabic_name: str
    formula_based: bool = False
    manual_input: bool = False
    area_based: bool = False

    @model_validator(mode="after")
    def _exactly_one_mode(self):
        if sum((self.formula_based, self.manual_input, self.area_based)) != 1:
            raise ValueError(f"{self.english_name}: exactly one pricing mode must be set")
        return self

    @property
    def uses_rate_table(self) -> bool:
        return self.formula_based or self.area_based


FAMILY_CONFIG = {
    OperationFamily.KHARZAN: FamilyConfig(english_name="Bullnose", arabic_name="خرزان", formula_based=True),
    OperationFamily.CHAMBOURLIEH: FamilyConfig(english_name="Chamfer / ogee", arabic_name="شمبورليه",
                                               formula_based=True),
    OperationFamily.BEVEL_1_CM: FamilyConfig(english_name="1 cm bevel", arabic_name="1 سم", formula_based=True),
    OperationFamily.BEVEL_2_CM: FamilyConfig(english_name="2 cm bevel", arabic_name="2 سم", formula_based=True),
    OperationFamily.BEVEL_3_CM: FamilyConfig(english_name="3 cm bevel", arabic_name="3 سم", formula_based=True),
    OperationFamily.JULIA: FamilyConfig(english_name="Julia profile", arabic_name="جوليا", formula_based=True),
    OperationFamily.SANDING: FamilyConfig(english_name="Sanding / frosting", arabic_name="صنفرة", area_based=True),
    OperationFamily.LASER: FamilyConfig(english_name="Laser (manual)", arabic_name="ليزر (يدوي)",
                                        manual_input=True),
}
