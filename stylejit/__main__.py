# stylejit/__main__.py

from stylejit.cli import app

if __name__ == "__main__":
    app()
