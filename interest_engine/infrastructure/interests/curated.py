"""Static phrase lists used to seed the pool and to recognise activity nouns."""
from __future__ import annotations

CURATED_INTERESTS: tuple[str, ...] = (
    # social and relationships
    "friendship", "dating", "romance", "love", "relationships",
    # entertainment
    "music", "movies", "dancing", "singing", "reading", "books", "art", "photography",
    # activities and hobbies
    "cooking", "travel", "gaming", "sports", "fitness", "yoga", "hiking", "swimming",
    # creative pursuits
    "writing", "painting", "crafts", "fashion", "design", "creativity",
    # technology and learning
    "technology", "programming", "science", "learning", "languages", "education",
    # lifestyle
    "food", "coffee", "wine", "pets", "gardening", "nature", "adventure",
    # social activities
    "parties", "concerts", "theater", "festivals", "volunteering", "humor",
)

ACTIVITY_KEYWORDS: frozenset[str] = frozenset(
    {
        # sports and physical activities
        "football", "soccer", "basketball", "tennis", "cricket", "baseball", "volleyball",
        "golf", "swimming", "running", "cycling", "hiking", "climbing", "skiing",
        "snowboarding", "surfing", "skateboarding", "boxing", "wrestling", "martial",
        "yoga", "pilates", "gym", "fitness", "workout", "exercise", "dance", "dancing",
        # entertainment and media
        "movie", "movies", "film", "films", "cinema", "music", "song", "songs", "singing",
        "concert", "guitar", "piano", "drums", "violin", "books", "book", "reading",
        "novel", "poetry", "writing", "photography", "photo", "art", "painting",
        "drawing", "gaming", "games", "game",
        # hobbies and crafts
        "cooking", "baking", "recipe", "recipes", "food", "wine", "coffee", "tea",
        "gardening", "plants", "flowers", "crafting", "crafts", "knitting", "sewing",
        "woodworking", "pottery", "jewelry", "collecting", "collection",
        # travel and exploration
        "travel", "traveling", "trip", "vacation", "adventure", "exploring", "camping",
        "sailing", "beach", "mountain", "culture", "language", "languages",
        # technology and learning
        "programming", "coding", "technology", "science", "math", "learning",
        "studying", "education",
        # social activities
        "volunteering", "charity", "community", "party", "celebration", "festival",
    }
)


__all__ = ["ACTIVITY_KEYWORDS", "CURATED_INTERESTS"]
