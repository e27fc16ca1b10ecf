"""Training lists that ship with the trainer."""

from __future__ import annotations

from typing import Dict, List, Optional

from .models import TrainingList

DEFAULT_LIST_ID = "default"

DEFAULT_LIST = TrainingList(
    id=DEFAULT_LIST_ID,
    name="Ultimate Visual Library (100 Items)",
    creator="Visual Library Trainer",
    categories={
        "Everyday Objects & Props": [
            "Chair", "Table", "Bed", "Bicycle", "Car", "Smartphone", "Backpack", "Sword", "Gun", "Book",
        ],
        "Animals (Core Set)": [
            "Cat", "Dog", "Horse", "Lion", "Elephant", "Eagle", "Fish (generic, like salmon)", "Snake", "Owl", "Bear",
        ],
        "People & Archetypes": [
            "Child", "Old man", "Old woman", "Farmer", "Knight", "Samurai", "Cowboy", "Soldier", "Astronaut", "Superhero",
        ],
        "Costumes & Fashion": [
            "Business suit",
            "Casual jeans & t-shirt",
            "Dress (classic gown)",
            "Kimono",
            "Armor (European plate)",
            "Spacesuit",
            "Hoodie + sneakers",
            "Medieval monk robe",
            "Sports uniform (basketball/football)",
            "Traditional African attire (dashiki, boubou, etc.)",
        ],
        "Environments / Architecture": [
            "Tree (oak)", "Mountain", "Beach", "Forest", "Desert dune", "Hut / cottage", "Castle", "Skyscraper",
            "Temple (Greek or Roman)", "Bridge",
        ],
        "Mythology & Religion": [
            "Zeus", "Athena", "Thor", "Loki", "Anubis", "Horus", "Quetzalcoatl", "Shiva", "Ganesha", "Buddha",
        ],
        "Pop Culture Cartoons / Characters": [
            "Mickey Mouse", "Bugs Bunny", "Daffy Duck", "Scooby-Doo", "Homer Simpson", "SpongeBob", "Samurai Jack",
            "Dexter (Dexter's Lab)", "Powerpuff Girls", "Snow White",
        ],
        "Pop Culture Modern Icons": [
            "Batman", "Superman", "Spider-Man", "Wonder Woman", "Darth Vader", "Yoda", "Iron Man", "Pikachu", "Mario",
            "Sonic the Hedgehog",
        ],
        "Fantasy & Sci-Fi Archetypes": [
            "Dragon", "Griffin", "Unicorn", "Werewolf", "Vampire", "Zombie", "Alien (classic grey)", "Robot",
            "Spaceship", "Magic staff",
        ],
        "Cultural / Artistic Symbols": [
            "Skull", "Rose", "Cross", "Yin-Yang", "Lotus flower", "Crown", "Mask (comedy/tragedy)", "Graffiti tag",
            "Totem pole", "Mandala",
        ],
    },
)

COMMUNITY_LISTS: List[TrainingList] = [
    TrainingList(
        id="anatomy-essentials",
        name="Human Anatomy Essentials",
        creator="@artbyjenna",
        is_custom=True,
        categories={
            "Head & Face": ["eye", "nose", "mouth", "ear", "skull", "jaw", "cheek", "forehead", "chin", "eyebrow"],
            "Torso": ["ribcage", "spine", "shoulder", "chest", "abs", "back muscles", "collarbone", "neck", "throat"],
            "Arms": ["bicep", "forearm", "elbow", "wrist", "hand", "fingers", "thumb", "palm", "knuckles"],
            "Legs": ["thigh", "knee", "calf", "ankle", "foot", "toes", "hip", "glutes", "shin"],
        },
    ),
    TrainingList(
        id="vehicles-fundamentals",
        name="Vehicle Design Fundamentals",
        creator="@conceptcarl",
        is_custom=True,
        categories={
            "Cars": ["sports car", "sedan", "SUV", "hatchback", "convertible", "coupe", "station wagon"],
            "Motorcycles": ["sport bike", "cruiser", "dirt bike", "scooter", "chopper", "touring bike"],
            "Trucks": ["pickup truck", "semi truck", "delivery van", "fire truck", "garbage truck"],
            "Other": ["bicycle", "bus", "train", "airplane", "helicopter", "boat", "tank"],
        },
    ),
    TrainingList(
        id="nature-forms",
        name="Natural Forms & Textures",
        creator="@wildsketchbook",
        is_custom=True,
        categories={
            "Trees": [
                "oak tree", "pine tree", "willow tree", "palm tree", "cherry blossom", "dead tree", "tree trunk",
                "tree roots",
            ],
            "Flowers": ["rose", "sunflower", "tulip", "lily", "daisy", "orchid", "poppy", "dandelion"],
            "Animals": ["cat", "dog", "bird", "fish", "butterfly", "deer", "rabbit", "squirrel", "wolf", "bear"],
            "Landscapes": [
                "mountain", "valley", "river", "lake", "forest", "desert", "cliff", "waterfall", "clouds", "rocks",
            ],
        },
    ),
]

_BUILTIN: Dict[str, TrainingList] = {
    training_list.id: training_list for training_list in [DEFAULT_LIST, *COMMUNITY_LISTS]
}


def builtin_lists() -> List[TrainingList]:
    return [training_list.model_copy(deep=True) for training_list in _BUILTIN.values()]


def get_builtin_list(list_id: str) -> Optional[TrainingList]:
    training_list = _BUILTIN.get(list_id)
    return training_list.model_copy(deep=True) if training_list else None


__all__ = ["COMMUNITY_LISTS", "DEFAULT_LIST", "DEFAULT_LIST_ID", "builtin_lists", "get_builtin_list"]
