"""
Job Guess - Guessing-game session engine

Players read crowd-written descriptions of a job, vote them up or down,
and guess the hidden title. The engine provides:
- Job catalogs with vote-ranked descriptions
- Session navigation with a results board at the end
- A per-question countdown driven by an external clock
- A REST/WebSocket API and a terminal CLI
"""

__version__ = "0.1.0"
