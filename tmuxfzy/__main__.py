"""Support ``python -m tmuxfzy`` with the same behavior as the ``tmux-fzy`` script."""

from .cli import main

if __name__ == "__main__":
    main()
