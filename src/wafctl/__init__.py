"""wafctl — manage reverse-proxy sites behind the WAF container."""

__version__ = "0.1.0"
