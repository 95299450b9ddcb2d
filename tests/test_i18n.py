"""
Tests for bilemo/i18n: language selection, fallback and catalog compilation.
"""

import gettext
import os

import pytest

from bilemo import i18n
from bilemo.i18n.catalog import compile_catalog, compile_catalogs, read_po, write_mo

PO_CONTENT = """# Test catalog
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "Product not found"
msgstr "Produit introuvable"

msgid "Customer "
"not found"
msgstr "Client introuvable"

msgid "Untranslated"
msgstr ""
"""


@pytest.fixture
def locale_dir(tmp_path, monkeypatch):
    """A locale directory holding a compiled French catalog."""
    messages_dir = tmp_path / "fr" / "LC_MESSAGES"
    messages_dir.mkdir(parents=True)
    po_file = messages_dir / "messages.po"
    po_file.write_text(PO_CONTENT, encoding="utf-8")
    compile_catalog(str(po_file), str(messages_dir / "messages.mo"))

    monkeypatch.setattr(i18n, "LOCALE_DIR", str(tmp_path))
    monkeypatch.setattr(i18n, "TRANSLATIONS", {})
    return tmp_path


class TestReadPo:
    def test_entries(self, tmp_path):
        po_file = tmp_path / "messages.po"
        po_file.write_text(PO_CONTENT, encoding="utf-8")

        entries = read_po(str(po_file))

        assert entries["Product not found"] == "Produit introuvable"
        assert entries["Customer not found"] == "Client introuvable"
        assert "Untranslated" not in entries
        assert "charset=UTF-8" in entries[""]


class TestWriteMo:
    def test_readable_by_gettext(self, tmp_path):
        mo_file = tmp_path / "messages.mo"
        write_mo(
            {
                "": "Content-Type: text/plain; charset=UTF-8\n",
                "Employee not found": "Employé introuvable",
            },
            str(mo_file),
        )

        with open(mo_file, "rb") as f:
            translation = gettext.GNUTranslations(f)

        assert translation.gettext("Employee not found") == "Employé introuvable"
        assert translation.gettext("Other") == "Other"


class TestCompileCatalogs:
    def test_missing_mo_compiled(self, tmp_path):
        messages_dir = tmp_path / "fr" / "LC_MESSAGES"
        messages_dir.mkdir(parents=True)
        (messages_dir / "messages.po").write_text(PO_CONTENT, encoding="utf-8")

        written = compile_catalogs(str(tmp_path))

        assert written == [str(messages_dir / "messages.mo")]
        assert os.path.exists(written[0])

    def test_fresh_mo_left_alone(self, locale_dir):
        assert compile_catalogs(str(locale_dir)) == []

    def test_force(self, locale_dir):
        assert len(compile_catalogs(str(locale_dir), force=True)) == 1

    def test_shipped_french_catalog(self, tmp_path):
        """The packaged French catalog parses and covers the error messages."""
        po_file = os.path.join(i18n.LOCALE_DIR, "fr", "LC_MESSAGES", "messages.po")

        entries = read_po(po_file)

        assert "Product not found" in entries
        assert "Invalid username or password" in entries
        assert compile_catalog(po_file, str(tmp_path / "messages.mo")) == len(entries)


class TestTranslation:
    def test_english_is_identity(self, locale_dir):
        i18n.set_language("en")

        assert i18n._("Product not found") == "Product not found"

    def test_french(self, locale_dir):
        i18n.set_language("fr")

        assert i18n.get_language() == "fr"
        assert i18n._("Product not found") == "Produit introuvable"
        assert i18n._("Untranslated") == "Untranslated"

    def test_explicit_language(self, locale_dir):
        assert i18n._("Customer not found", "fr") == "Client introuvable"

    def test_unknown_language_falls_back(self, locale_dir):
        assert i18n._("Product not found", "de") == "Product not found"

    def test_catalog_cached(self, locale_dir):
        assert i18n.get_translation("fr") is i18n.get_translation("fr")

    def test_ngettext_fallback(self, locale_dir):
        assert i18n.ngettext("%d product", "%d products", 2, "de") == "%d products"
