"""
RoadRace - Race Card Game Engine

A deterministic, pure rule engine for a 2-4 player racing card game with
AI opponents. Players lay distance cards to reach 1000 km while hampering
each other with blocks, clearing them with remedies and protecting
themselves with immunities. The engine provides:
- Immutable game state and pure transitions
- Deck building, shuffling and drawing
- Card legality and effect resolution
- AI strategies for computer-controlled seats
"""

__version__ = "0.1.0"
