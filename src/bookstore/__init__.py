"""BookStore catalog API.

REST API over Books and Authors with username/password authentication
issuing short-lived signed session tokens.
"""

__version__ = "0.1.0"
