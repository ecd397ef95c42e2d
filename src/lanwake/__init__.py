"""lanwake: Wake-on-LAN magic packet sender."""

__version__ = "0.1.0"
