"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

SAMPLE_CATALOG = """\
# German translations.
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

#: views.py:3
msgid "hello"
msgstr "Hallo"

#: views.py:7
msgid "bye"
msgstr "Tschuess"
"""


@pytest.fixture
def sample_catalog() -> str:
    """Catalog with a header, one used and one unused entry."""
    return SAMPLE_CATALOG


@pytest.fixture
def project(tmp_path: Path, sample_catalog: str) -> Path:
    """Project tree where "hello" is used and "bye" is not."""
    locale = tmp_path / "locale" / "de" / "LC_MESSAGES"
    locale.mkdir(parents=True)
    (locale / "a.po").write_text(sample_catalog, encoding="utf-8")
    (tmp_path / "views.py").write_text(
        'from django.utils.translation import gettext as _\n\nGREETING = _("hello")\n',
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def catalog_path(project: Path) -> Path:
    """Path to the sample project's catalog."""
    return project / "locale" / "de" / "LC_MESSAGES" / "a.po"
