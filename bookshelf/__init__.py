"""Book catalogue: REST services over MongoDB and an HTML front end."""

__version__ = "0.1.0"