"""GlassPOS — glass cutting and edge-finishing pricing service."""
