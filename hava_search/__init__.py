"""Natural-language listings search for the Hava real-estate marketplace."""

__version__ = "0.1.0"
