"""cnf-feedback CLI bootstrap."""

from cnf_feedback.cli import app

if __name__ == "__main__":
    app()
