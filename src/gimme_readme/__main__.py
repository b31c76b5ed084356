"""Allow ``python -m gimme_readme``."""

from gimme_readme.cli import run

if __name__ == "__main__":
    run()
