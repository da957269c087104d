import argparse
import os
import sys

from astra.assistant import Astra
from astra.config import API_URL
from astra.logui import ui_state, info, error, set_log_level, UI_MODE


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Astra: voice and text phone controls")
    p.add_argument("--voice", action="store_true", help="read commands from the microphone")
    p.add_argument("--speak", action="store_true", help="speak responses aloud")
    p.add_argument("--ui", action="store_true", help="emit STATE/COMMAND lines for a UI bridge")
    p.add_argument("--remote", nargs="?", const=API_URL, default=None,
                   help="send commands to the Astra API instead of a local session")
    p.add_argument("--log", default=None, help="log level (DEBUG, INFO, WARN, ERROR)")
    return p.parse_args(argv)


def run_remote(base_dir: str, url: str):
    from astra.intent_api import AstraClient, start_local_api

    if not start_local_api(base_dir):
        info("Local API not started. Will try anyway.")
    client = AstraClient(url)
    while True:
        try:
            text = input("> ")
        except (KeyboardInterrupt, EOFError):
            break
        if text.strip().lower() in ("exit", "quit"):
            break
        result = client.send_command(text, source="text")
        if result is not None:
            print(result["response"], flush=True)


def main(argv=None):
    args = parse_args(argv)
    if args.log:
        set_log_level(args.log)
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    try:
        if args.remote:
            run_remote(base_dir, args.remote)
            return

        voice = None
        listener = None
        if args.speak:
            from astra.voice import Voice
            voice = Voice()
        if args.voice:
            from astra.listener import Listener
            listener = Listener(base_dir=base_dir)
        Astra(voice=voice, listener=listener).run()
    except Exception as e:
        ui_state("ERROR")
        error(f"Failed to start: {e}")
        if not UI_MODE:
            input("Press Enter to exit...")
        sys.exit(1)


if __name__ == "__main__":
    main()
