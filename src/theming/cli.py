"""Command line checks for theme palettes and resolution.

Examples:
    python -m theming contrast "#6b7280" "#ffffff" --large
    python -m theming validate light --json
    python -m theming resolve system --system dark
    python -m theming script --key theme > prepaint.js
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from theming.design.contrast import (
    InvalidColorFormat,
    contrast_ratio,
    meets_aa,
    meets_aaa,
    validate_theme_palette,
)
from theming.design.prepaint import render_prepaint_script, render_prepaint_tag
from theming.design.theme_resolver import get_initial_preference, resolve
from theming.models import DEFAULT_STORAGE_KEY, ResolvedTheme


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="theming", description="Theme palette and resolution checks")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("contrast", help="Contrast ratio of two 6-digit hex colors")
    c.add_argument("fg", help="Foreground color, e.g. #000000")
    c.add_argument("bg", help="Background color, e.g. #ffffff")
    c.add_argument("--large", action="store_true", help="Use large-text thresholds")
    c.add_argument("--json", action="store_true", help="Emit JSON")

    v = sub.add_parser("validate", help="Run the AA battery for a palette")
    v.add_argument("theme", choices=[t.value for t in ResolvedTheme])
    v.add_argument("--json", action="store_true", help="Emit JSON")

    r = sub.add_parser("resolve", help="Resolve a (possibly invalid) stored preference")
    r.add_argument("preference", help="Stored value, e.g. light / dark / system")
    r.add_argument(
        "--system",
        choices=[t.value for t in ResolvedTheme],
        default=ResolvedTheme.LIGHT.value,
        help="Platform signal (default light)",
    )

    s = sub.add_parser("script", help="Print the pre-paint script")
    s.add_argument("--key", default=DEFAULT_STORAGE_KEY, help="Storage key of the preference")
    s.add_argument("--marker", default="dark", help="Marker class toggled for dark")
    s.add_argument("--tag", action="store_true", help="Wrap in a <script> element")
    return p.parse_args(argv)


def _cmd_contrast(args: argparse.Namespace) -> int:
    try:
        ratio = contrast_ratio(args.fg, args.bg)
        aa = meets_aa(args.fg, args.bg, args.large)
        aaa = meets_aaa(args.fg, args.bg, args.large)
    except InvalidColorFormat as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if args.json:
        print(json.dumps({"ratio": round(ratio, 2), "aa": aa, "aaa": aaa}))
    else:
        print(f"{ratio:.2f}:1  AA={'pass' if aa else 'fail'}  AAA={'pass' if aaa else 'fail'}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    report = validate_theme_palette(args.theme)
    if args.json:
        print(
            json.dumps(
                {
                    "theme": args.theme,
                    "is_valid": report.is_valid,
                    "violations": report.violations,
                    "ratios": {k: round(v, 2) for k, v in report.ratios.items()},
                },
                indent=2,
            )
        )
    else:
        for name, ratio in report.ratios.items():
            print(f"{name:<16}{ratio:6.2f}")
        for violation in report.violations:
            print(f"FAIL {violation}")
    return 0 if report.is_valid else 1


def _cmd_resolve(args: argparse.Namespace) -> int:
    preference = get_initial_preference(args.preference)
    resolved = resolve(preference, ResolvedTheme(args.system))
    print(f"{preference.value} -> {resolved.value}")
    return 0


def _cmd_script(args: argparse.Namespace) -> int:
    render = render_prepaint_tag if args.tag else render_prepaint_script
    print(render(args.key, args.marker))
    return 0


_COMMANDS = {
    "contrast": _cmd_contrast,
    "validate": _cmd_validate,
    "resolve": _cmd_resolve,
    "script": _cmd_script,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    return _COMMANDS[args.command](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
