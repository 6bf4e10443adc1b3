"""
Game recommendation engine.

Responsibilities:
- Model catalog games and survey answers.
- Filter and sort the public gallery.
- Rank games similar to a given game (player count, play time, age).
- Match survey answers to a base game, picking among the top five.
"""
