"""
Race - The card game itself.

Key mechanics:
- Progress cards add distance; first to 1000 km wins
- Green Light must be played before any Progress card
- Block cards stop an opponent until the matching Remedy is played
- Immunity cards permanently protect against one hazard kind

This package contains:
- Card blueprints and the full deck (cards)
- Initial game setup (setup, imported directly to keep the engine
  free of import cycles)
"""

from .cards import CATALOG, FULL_DECK, CardBlueprint, create_card, get_blueprint

__all__ = [
    "CATALOG",
    "FULL_DECK",
    "CardBlueprint",
    "create_card",
    "get_blueprint",
]
