"""
Compilation of .po message catalogs into the binary .mo files read by
gettext.
"""

import glob
import os
import struct
from typing import Dict, List

from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.i18n.catalog")

MO_MAGIC = 0x950412DE


def _unquote(text: str) -> str:
    return (
        text.replace('\\"', '"')
        .replace("\\n", "\n")
        .replace("\\t", "\t")
        .replace("\\\\", "\\")
    )


def read_po(po_file: str) -> Dict[str, str]:
    """
    Parse msgid/msgstr pairs from a .po file.  The header entry (empty
    msgid) is kept because it carries the charset.
    """
    entries: Dict[str, str] = {}
    msgid = None
    msgstr = None
    current = None

    def flush():
        if msgid is not None and msgstr:
            entries[msgid] = msgstr

    with open(po_file, "r", encoding="utf-8") as f:
        for raw_line in f:
            line = raw_line.strip()
            if line.startswith('msgid "'):
                flush()
                msgid, msgstr, current = _unquote(line[7:-1]), None, "id"
            elif line.startswith('msgstr "'):
                msgstr, current = _unquote(line[8:-1]), "str"
            elif line.startswith('"') and line.endswith('"') and current:
                if current == "id":
                    msgid += _unquote(line[1:-1])
                else:
                    msgstr += _unquote(line[1:-1])
            elif line == "" or line.startswith("#"):
                flush()
                msgid, msgstr, current = None, None, None
    flush()
    return entries


def write_mo(entries: Dict[str, str], mo_file: str):
    """Write entries in the GNU .mo format, keys sorted."""
    pairs = sorted(
        (key.encode("utf-8"), value.encode("utf-8")) for key, value in entries.items()
    )
    count = len(pairs)
    key_table_offset = 7 * 4
    value_table_offset = key_table_offset + 8 * count
    data_offset = value_table_offset + 8 * count

    key_table: List[bytes] = []
    value_table: List[bytes] = []
    data: List[bytes] = []
    offset = data_offset
    for key, _value in pairs:
        key_table.append(struct.pack("II", len(key), offset))
        data.append(key + b"\0")
        offset += len(key) + 1
    for _key, value in pairs:
        value_table.append(struct.pack("II", len(value), offset))
        data.append(value + b"\0")
        offset += len(value) + 1

    header = struct.pack(
        "7I", MO_MAGIC, 0, count, key_table_offset, value_table_offset, 0, 0
    )
    with open(mo_file, "wb") as f:
        f.write(header)
        f.write(b"".join(key_table))
        f.write(b"".join(value_table))
        f.write(b"".join(data))


def compile_catalog(po_file: str, mo_file: str) -> int:
    """Compile one .po file.  Returns the number of messages written."""
    entries = read_po(po_file)
    write_mo(entries, mo_file)
    logger.info("Compiled %s (%d messages)", mo_file, len(entries))
    return len(entries)


def compile_catalogs(locale_dir: str, force: bool = False) -> List[str]:
    """
    Compile every locales/<lang>/LC_MESSAGES/*.po whose .mo is missing or
    older than the .po.  Returns the .mo files written.
    """
    written = []
    pattern = os.path.join(locale_dir, "*", "LC_MESSAGES", "*.po")
    for po_file in sorted(glob.glob(pattern)):
        mo_file = po_file[:-3] + ".mo"
        if (
            force
            or not os.path.exists(mo_file)
            or os.path.getmtime(mo_file) < os.path.getmtime(po_file)
        ):
            compile_catalog(po_file, mo_file)
            written.append(mo_file)
    return written
