"""
n15 - Number 15 Game Server

A TCP server for the game of 15: players alternately claim digits
1-9, and the first to hold three digits summing to 15 wins.
The server provides:
- Win detection and board bookkeeping
- A center/corner heuristic opponent
- One line-protocol game session per connection
- A read-only HTTP status API
"""

__version__ = "0.0.0.1"
