"""Package entry point for ``python -m lingua_notes``.

HOW: ``--serve`` starts the HTTP service; anything else goes to the CLI.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from lingua_notes.server.app import run_api
        run_api()
    else:
        from lingua_notes.cli import main
        main()
