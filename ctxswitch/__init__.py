"""Round-robin scheduling and context-switch simulator with a Tk view of PCBs."""

__version__ = "0.1.0"