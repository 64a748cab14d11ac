"""
Seed jobs for the built-in catalog.

Vote counts are the starting values; a fresh session begins with them.
"""

DEFAULT_JOBS: list[dict] = [
    {
        "id": 1,
        "title": "Software Engineer",
        "descriptions": [
            {
                "id": "1-1",
                "text": "Writes code and fixes bugs",
                "contributor": "Alex",
                "votes": 5,
            },
            {
                "id": "1-2",
                "text": "Turns coffee into code",
                "contributor": "Jamie",
                "votes": 10,
            },
            {
                "id": "1-3",
                "text": "Builds digital solutions to real-world problems",
                "contributor": "Taylor",
                "votes": 7,
            },
        ],
    },
    {
        "id": 2,
        "title": "Graphic Designer",
        "descriptions": [
            {
                "id": "2-1",
                "text": "Creates visual concepts using computer software",
                "contributor": "Jordan",
                "votes": 8,
            },
            {
                "id": "2-2",
                "text": "Makes things look pretty",
                "contributor": "Casey",
                "votes": 4,
            },
            {
                "id": "2-3",
                "text": "Communicates ideas through images and layouts",
                "contributor": "Riley",
                "votes": 6,
            },
        ],
    },
]
