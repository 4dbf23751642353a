"""Command-line entry point: `python -m treasure_dash` or `treasure-dash`."""

import argparse
from typing import List, Optional

from .audio import ToneAudio
from .config import CONFIGS
from .controls import DEFAULT_BINDINGS_PATH, Action, KeyBindings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treasure-dash", description="Treasure Dash platformer")
    parser.add_argument("--config", choices=sorted(CONFIGS), default="default", help="Physics/rules preset")
    parser.add_argument("--level", type=int, default=None, help="Skip the menu and start at this level")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated levels")
    parser.add_argument("--mute", action="store_true", help="Start with sound off")
    parser.add_argument("--keys", default=str(DEFAULT_BINDINGS_PATH), help="Key bindings file")
    parser.add_argument(
        "--bind", action="append", default=[], metavar="ACTION=KEY",
        help="Remap an action (jump, left, right, dash); may be repeated",
    )
    parser.add_argument("--reset-keys", action="store_true", help="Restore default key bindings")
    parser.add_argument("--show-keys", action="store_true", help="Print key bindings and exit")
    return parser


def apply_bindings(bindings: KeyBindings, requests: List[str]) -> None:
    """Apply ACTION=KEY requests, printing the outcome of each."""
    for request in requests:
        action, sep, key = request.partition("=")
        action = action.strip().lower()
        if not sep or action not in {a.value for a in Action}:
            print(f"Invalid binding: {request!r} (expected ACTION=KEY)")
            continue
        key = key.strip().lower()
        if not bindings.is_bindable(key):
            print(f"{action}: Invalid key!")
        elif bindings.set_key(action, key):
            print(f"{action}: Key set!")
        else:
            print(f"{action}: Key in use!")


def show_bindings(bindings: KeyBindings) -> None:
    for action in Action:
        print(f"  {action.value:<6} {bindings.display_name(bindings.key_for(action))}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.level is not None and args.level < 1:
        parser.error(f"--level must be >= 1, got {args.level}")

    bindings = KeyBindings(args.keys)
    if args.reset_keys:
        bindings.reset()
        print("Key bindings reset")
    apply_bindings(bindings, args.bind)

    if args.show_keys:
        show_bindings(bindings)
        return 0

    # Import here so --show-keys and --bind never open a window
    from .engine import PlatformerEngine

    engine = PlatformerEngine(
        config=CONFIGS[args.config],
        bindings=bindings,
        audio=ToneAudio(enabled=not args.mute),
        seed=args.seed,
    )
    if args.level is not None:
        engine.start(args.level)
    engine.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
