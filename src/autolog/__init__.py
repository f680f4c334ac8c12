"""AutoLog - file attachments for profiles, garages, vehicles and maintenance logs."""

__version__ = "0.1.0"
