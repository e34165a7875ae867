"""Allow ``python -m streamscout``."""

from streamscout.cli.commands import main

if __name__ == "__main__":
    main()
