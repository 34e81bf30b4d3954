"""Apache Tika server infrastructure package.

The ``client`` module is the facade; ``http_client`` owns the ``requests``
session and ``address`` normalizes endpoint URLs.
"""
