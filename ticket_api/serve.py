#!/usr/bin/env python3
import os
import sys

from ticket_api.config import GUNICORN_WORKERS, PORT


def main():
    # If command-line args were provided (via Docker CMD/compose `command`),
    # execute them; otherwise default to starting gunicorn.
    argv = sys.argv[1:]
    if argv:
        print("Executing provided command:", " ".join(argv))
        os.execvp(argv[0], argv)

    args = [
        "gunicorn",
        "-w",
        GUNICORN_WORKERS,
        "-b",
        f"0.0.0.0:{PORT}",
        "ticket_api.app:create_app()",
    ]
    print("Starting default:", " ".join(args))
    os.execvp("gunicorn", args)


if __name__ == "__main__":
    sys.exit(main())
