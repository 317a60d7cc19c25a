#!/usr/bin/env python3
"""
Multi-script keyboard toolkit CLI.

Loads settings from ekushey.toml when present, or override with flags:

    python -m ekushey.cli --layout avro --type "Ami banglay gan gai"
    python -m ekushey.cli --layout jatiyo --type "jfuf"
    python -m ekushey.cli --table avro
    python -m ekushey.cli --list-layouts
"""

import argparse
import logging
import sys
from pathlib import Path


def _find_default_config() -> Path | None:
    """Look for ekushey.toml in CWD."""
    candidate = Path("ekushey.toml")
    if candidate.exists():
        return candidate
    return None


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Console logging in the ``time [LEVEL] name: message`` format."""
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    return logger


def _type_keys(keyboard, raw: str) -> str:
    """Feed ``raw`` to a fresh session, holding shift for upper-case letters."""
    session = keyboard.focus()
    for i, char in enumerate(raw):
        if char.isupper() and not keyboard.resolver.is_shift_active:
            keyboard.press_shift()
        # One second apart so that spaces never count as a double tap
        session.handle_key(char, timestamp=float(i))
    return session.text


def _print_table(layout) -> None:
    from ekushey.tables import direct_map, phonetic_table

    if layout.is_phonetic:
        table = phonetic_table(layout)
        print(f"═══ {table.name} (phonetic) ═══")
        for key in table.sorted_keys():
            general = table.general.get(key, "")
            initial = table.word_initial.get(key)
            extra = f"   word-initial: {initial}" if initial is not None else ""
            print(f"  {key:>4s} → {general or '-'}{extra}")
        print(f"\nGeneral keys: {len(table.general)}, word-initial keys: {len(table.word_initial)}")
    else:
        mapping = direct_map(layout)
        print(f"═══ {layout.value} (fixed) ═══")
        if not mapping:
            print("  (no table: letters are typed as they are)")
        for key in sorted(mapping):
            print(f"  {key:>4s} → {mapping[key]}")


def main():
    parser = argparse.ArgumentParser(
        description="Multi-script phonetic keyboard toolkit"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect ekushey.toml)",
    )
    parser.add_argument(
        "--layout",
        help="Layout to type with (overrides the configured default)",
    )
    parser.add_argument(
        "--type",
        metavar="TEXT",
        help="Type TEXT key by key and print the result",
    )
    parser.add_argument(
        "--table",
        metavar="LAYOUT",
        help="Print the glyph table of a layout",
    )
    parser.add_argument(
        "--list-layouts",
        action="store_true",
        help="List the available layouts",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log composition details to stderr",
    )
    args = parser.parse_args()

    setup_logging("DEBUG" if args.verbose else "WARNING")

    from ekushey.config import KeyboardSettings, load_settings
    from ekushey.layouts import Layout
    from ekushey.session import Keyboard

    # ── Settings ─────────────────────────────────────────────────────────

    config_path = Path(args.config) if args.config else _find_default_config()
    try:
        settings = load_settings(config_path) if config_path else KeyboardSettings()
        layout = Layout.from_name(args.layout) if args.layout else None
        table_layout = Layout.from_name(args.table) if args.table else None
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    keyboard = Keyboard(settings)
    if layout is not None:
        keyboard.switch_layout(layout)

    # ── List layouts ─────────────────────────────────────────────────────

    if args.list_layouts:
        for item in Layout:
            kind = "phonetic" if item.is_phonetic else "fixed"
            enabled = "*" if item in settings.enabled_layouts else " "
            print(f" {enabled} {item.value:16s} {kind:9s} [{item.script}]")
        print()

    # ── Table ────────────────────────────────────────────────────────────

    if table_layout is not None:
        _print_table(table_layout)
        print()

    # ── Type ─────────────────────────────────────────────────────────────

    if args.type is not None:
        print(f"{keyboard.layout.value}: {_type_keys(keyboard, args.type)}")

    if not (args.list_layouts or table_layout or args.type is not None):
        print(keyboard.summary())


if __name__ == "__main__":
    main()
