"""poclean - find and remove unused gettext translations.

Scans a project tree for ``.po`` catalogs and drops every ``msgid``
entry that no source or template file references anymore.
"""

__version__ = "0.1.0"
