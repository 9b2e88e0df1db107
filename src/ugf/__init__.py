"""Urban Greening Factor analyzer."""

__version__ = "0.1.0"
