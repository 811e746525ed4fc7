"""Allow ``python -m textlinker``."""

from textlinker.main import main

if __name__ == "__main__":
    main()
