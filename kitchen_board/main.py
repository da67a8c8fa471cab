"""Entry point for the kitchen board Textual app."""

from __future__ import annotations

from kitchen_board.board_app import KitchenBoardApp
from kitchen_board.config import load_config


def main() -> None:
    """Run the Textual application."""
    KitchenBoardApp(config=load_config()).run()


if __name__ == "__main__":
    main()
