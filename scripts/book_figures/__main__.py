"""CLI entry point for book_figures package.

Invoke as:  python scripts/book_figures --chapter chap12
"""

# Bootstrap: when run as `python scripts/book_figures` (directory path),
# re-execute through runpy so the package machinery resolves relative imports
# correctly and without DeprecationWarning.
if __name__ == "__main__" and not __package__:
    import os
    import runpy
    import sys

    _scripts_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _scripts_dir not in sys.path:
        sys.path.insert(0, _scripts_dir)
    runpy.run_module("book_figures", run_name="__main__", alter_sys=True)
    raise SystemExit(0)  # unreachable, run_module already calls sys.exit()

import argparse
import sys

from .picture import save_pair
from .struct_figures import fig16_1
from .tuple_figures import fig12_1, fig12_2

# ---------------------------------------------------------------------------
# Figure registry
# ---------------------------------------------------------------------------

FIGURES = {
    "chap12": [
        ("fig121", fig12_1),
        ("fig122", fig12_2),
    ],
    "chap16": [
        ("fig161", fig16_1),
    ],
}

# Full chapter names for display
CHAPTER_NAMES = {
    "chap12": "chap12-tuples",
    "chap16": "chap16-structs-and-functions",
}


def match_chapter(query):
    """Match a query like 'chap12', 'chap12-tuples', or '12' to a registry key."""
    q = query.strip().rstrip("/")

    # Exact match
    if q in FIGURES:
        return q

    # Match by full name
    for key, name in CHAPTER_NAMES.items():
        if q == name:
            return key

    # Match by number (e.g. "12" matches "chap12")
    for key in FIGURES:
        if q.lstrip("0") == key[len("chap"):]:
            return key

    return None


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate SVG and PDF figures for the book."
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--chapter", help="Chapter to generate figures for (e.g. chap12)"
    )
    group.add_argument("--all", action="store_true", help="Generate all figures")
    group.add_argument("--list", action="store_true", help="List available figures")
    parser.add_argument(
        "--output-dir", help="Directory to write figures to (default: build/figures)"
    )
    args = parser.parse_args(argv)

    if args.list:
        print("Available figures:")
        for key in sorted(FIGURES.keys()):
            name = CHAPTER_NAMES.get(key, key)
            print(f"\n  {name}/")
            for figure_id, _ in FIGURES[key]:
                print(f"    {figure_id}.svg, {figure_id}.pdf")
        total = sum(len(f) for f in FIGURES.values())
        print(f"\n{total} figures total.")
        return 0

    if args.all:
        keys = sorted(FIGURES.keys())
    else:
        key = match_chapter(args.chapter)
        if key is None:
            print(f"No figures registered for '{args.chapter}'.")
            print("Use --list to see available figures.")
            return 1
        keys = [key]

    total = 0
    for key in keys:
        name = CHAPTER_NAMES.get(key, key)
        print(f"{name}/")
        for figure_id, build in FIGURES[key]:
            save_pair(build(), figure_id, out_dir=args.output_dir)
            total += 1

    print(f"\nGenerated {total} figure(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
