#!/usr/bin/env python3
"""
Demo: Write SVG path elements.

Shows the same element at several precisions, then saves a document.
"""

from structuredvg.examples import build_example_path, build_minimal_path
from structuredvg.backends import element_to_string, save_svg_file
from structuredvg.io import WriteSettings


def main():
    element = build_example_path(tab_count=1)

    print("=" * 80)
    print("PATH WRITER DEMO")
    print("=" * 80)

    for precision in (0, 2, 4):
        print(f"\nPRECISION {precision}:")
        print("-" * 80)
        print(element_to_string(element, WriteSettings(precision=precision)))

    filename = "tabs.svg"
    save_svg_file([element, build_minimal_path()], filename)
    print(f"\nSaved to: {filename}")
    print("=" * 80)


if __name__ == "__main__":
    main()
