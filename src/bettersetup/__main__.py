from pathlib import Path
import argparse
import logging
import os
import sys

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from bettersetup.bootstrap import create_runtime
from bettersetup.presentation.console import CHAT_CHOICES, ChatConsole


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Commands: 'spec', 'spec <profile>', 'spec <profile> gear', 'gearself'.")
    print("- Senders in the demo host: Aldric (player), Overseer (game master).")
    print("- Startup issues: verify BETTERSETUP_DATABASE_URL or unset it to use in-memory settings.")


def _configure_logging() -> None:
    level_name = os.getenv("BETTERSETUP_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bettersetup",
        description="Chat-driven spec and gear setup for playerbots against a demo host.",
    )
    parser.add_argument("--as", dest="sender", default="Aldric", help="Name of the character sending chat.")
    parser.add_argument("--channel", dest="chat", choices=CHAT_CHOICES, default="party", help="Chat path to use.")
    parser.add_argument("--channel-name", default="general", help="Chat channel name for --channel channel.")
    parser.add_argument("--target", default=None, help="Whisper target name.")
    parser.add_argument("--command", default=None, help="Send one message and exit.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for role rolls.")
    return parser


def main(argv=None) -> int:
    load_dotenv()
    _configure_logging()
    args = build_parser().parse_args(argv)

    try:
        runtime = create_runtime(seed=args.seed)
        session = ChatConsole(
            runtime,
            sender_name=args.sender,
            chat=args.chat,
            target_name=args.target,
            channel_name=args.channel_name,
        )
        session.login()
        if args.command is not None:
            session.send(args.command)
        else:
            session.run_interactive()
    except KeyboardInterrupt:
        print("\nSession ended.")
    except ValueError as exc:
        print(f"Invalid option: {exc}")
        _print_help_surface()
        return 2
    except Exception as exc:
        logging.getLogger(__name__).exception("Console session failed")
        print("An unexpected error occurred. The session closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
