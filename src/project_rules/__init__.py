"""project-rules: JSON-RPC stdio server for project coding rules."""

__version__ = "2.0.0"
