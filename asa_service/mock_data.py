"""Small in-memory dataset served when no database is configured.

Rows use the same shape as the models' ``to_dict`` output so route handlers
do not need to know which repository they are talking to.
"""

MOCK_MESSAGE = "Using mock data - database not connected"

MAPS = [
    {
        "id": 1,
        "name": "The Island",
        "slug": "the-island",
        "type": "official",
        "is_official": True,
        "is_expansion": False,
        "release_date": "2023-10-25",
        "size_km": 48.0,
        "description": "The original ARK map featuring diverse biomes and creatures.",
        "image_url": None,
    },
    {
        "id": 2,
        "name": "The Center",
        "slug": "the-center",
        "type": "official",
        "is_official": True,
        "is_expansion": False,
        "release_date": "2024-06-11",
        "size_km": 64.0,
        "description": "A massive floating island with a central landmass and underground areas.",
        "image_url": None,
    },
    {
        "id": 3,
        "name": "Scorched Earth",
        "slug": "scorched-earth",
        "type": "expansion",
        "is_official": True,
        "is_expansion": True,
        "release_date": "2024-04-01",
        "size_km": 36.0,
        "description": "Desert survival with extreme weather.",
        "image_url": None,
    },
    {
        "id": 4,
        "name": "Ragnarok",
        "slug": "ragnarok",
        "type": "official",
        "is_official": True,
        "is_expansion": False,
        "release_date": "2024-10-15",
        "size_km": 144.0,
        "description": "A large Norse-inspired map with castles and diverse biomes.",
        "image_url": None,
    },
    {
        "id": 5,
        "name": "Crystal Isles",
        "slug": "crystal-isles",
        "type": "official",
        "is_official": True,
        "is_expansion": False,
        "release_date": "2025-03-20",
        "size_km": 96.0,
        "description": "A magical map featuring crystal formations and unique creatures.",
        "image_url": None,
    },
]

CREATURES = [
    {
        "id": 1,
        "name": "Rex",
        "slug": "rex",
        "description": "Large carnivorous theropod, an apex predator.",
        "temperament": "aggressive",
        "diet": "carnivore",
        "is_tameable": True,
        "is_rideable": True,
        "is_breedable": True,
        "taming_method": "knockout",
        "health": 1700.0,
        "stamina": 420.0,
        "oxygen": 150.0,
        "food": 3000.0,
        "weight": 500.0,
        "melee_damage": 62.0,
        "movement_speed": 100.0,
        "image_url": None,
        "wiki_url": "https://ark.wiki.gg/wiki/Rex",
        "dododex_id": "rex",
    },
    {
        "id": 2,
        "name": "Dodo",
        "slug": "dodo",
        "description": "Small passive bird, easily tamed.",
        "temperament": "passive",
        "diet": "herbivore",
        "is_tameable": True,
        "is_rideable": False,
        "is_breedable": True,
        "taming_method": "passive",
        "health": 40.0,
        "stamina": 100.0,
        "oxygen": 150.0,
        "food": 450.0,
        "weight": 50.0,
        "melee_damage": 5.0,
        "movement_speed": 100.0,
        "image_url": None,
        "wiki_url": "https://ark.wiki.gg/wiki/Dodo",
        "dododex_id": "dodo",
    },
    {
        "id": 3,
        "name": "Argentavis",
        "slug": "argentavis",
        "description": "Giant scavenger bird capable of carrying heavy loads.",
        "temperament": "short-tempered",
        "diet": "carrion",
        "is_tameable": True,
        "is_rideable": True,
        "is_breedable": True,
        "taming_method": "knockout",
        "health": 365.0,
        "stamina": 400.0,
        "oxygen": 150.0,
        "food": 2000.0,
        "weight": 400.0,
        "melee_damage": 25.0,
        "movement_speed": 100.0,
        "image_url": None,
        "wiki_url": "https://ark.wiki.gg/wiki/Argentavis",
        "dododex_id": "argentavis",
    },
    {
        "id": 4,
        "name": "Dragon",
        "slug": "dragon",
        "description": "Boss guardian of the Volcano arena.",
        "temperament": "aggressive",
        "diet": "carnivore",
        "is_tameable": False,
        "is_rideable": False,
        "is_breedable": False,
        "taming_method": "untameable",
        "health": 75000.0,
        "stamina": 8000.0,
        "oxygen": None,
        "food": None,
        "weight": None,
        "melee_damage": 300.0,
        "movement_speed": 100.0,
        "image_url": None,
        "wiki_url": "https://ark.wiki.gg/wiki/Dragon",
        "dododex_id": None,
    },
]

CREATURE_STATS = {
    "rex": [
        {"stat_name": "health", "base_value": 1700.0, "per_level_wild": 340.0, "per_level_tamed": 170.0},
        {"stat_name": "melee_damage", "base_value": 62.0, "per_level_wild": 3.1, "per_level_tamed": 1.55},
        {"stat_name": "stamina", "base_value": 420.0, "per_level_wild": 42.0, "per_level_tamed": 21.0},
    ],
    "dodo": [
        {"stat_name": "health", "base_value": 40.0, "per_level_wild": 8.0, "per_level_tamed": 4.0},
        {"stat_name": "stamina", "base_value": 100.0, "per_level_wild": 10.0, "per_level_tamed": 5.0},
    ],
}

TAMING = {
    "rex": {
        "method": "knockout",
        "preferred_foods": ["Raw Prime Meat", "Cooked Prime Meat"],
        "kibble": "Exceptional Kibble",
        "unconscious_time": "2 hours 30 minutes",
        "torpor_depletion_rate": 1.0,
        "feeding_interval": None,
        "special_requirements": None,
        "taming_notes": "Use a Longneck with Tranq Darts from a safe distance.",
    },
    "dodo": {
        "method": "passive",
        "preferred_foods": ["Mejoberry", "Crops"],
        "kibble": "Basic Kibble",
        "unconscious_time": "15 minutes",
        "torpor_depletion_rate": None,
        "feeding_interval": 0.5,
        "special_requirements": None,
        "taming_notes": None,
    },
    "argentavis": {
        "method": "knockout",
        "preferred_foods": ["Raw Mutton", "Raw Prime Meat"],
        "kibble": "Superior Kibble",
        "unconscious_time": None,
        "torpor_depletion_rate": None,
        "feeding_interval": None,
        "special_requirements": None,
        "taming_notes": None,
    },
}

TAMING_FOODS = {
    "rex": [
        {"food_name": "Exceptional Kibble", "effectiveness": 100.0, "quantity_for_level_1": 10, "taming_time_minutes": 32},
        {"food_name": "Prime Meat", "effectiveness": 90.0, "quantity_for_level_1": 12, "taming_time_minutes": 40},
        {"food_name": "Raw Meat", "effectiveness": 70.0, "quantity_for_level_1": 34, "taming_time_minutes": 94},
    ],
    "dodo": [
        {"food_name": "Basic Kibble", "effectiveness": 100.0, "quantity_for_level_1": 3, "taming_time_minutes": 5},
        {"food_name": "Mejoberry", "effectiveness": 80.0, "quantity_for_level_1": 9, "taming_time_minutes": 8},
    ],
}

REGIONS = [
    {"id": 1, "map_id": 1, "map_slug": "the-island", "name": "Tropical Island South", "category": "tropical", "biome": "tropical", "description": "Warm southern beaches with gentle wildlife."},
    {"id": 2, "map_id": 1, "map_slug": "the-island", "name": "Snowy Mountains", "category": "snow", "biome": "snow", "description": "Frozen peaks in the north."},
    {"id": 3, "map_id": 1, "map_slug": "the-island", "name": "Volcano", "category": "volcanic", "biome": "volcanic", "description": "Active volcano rich in metal and obsidian."},
    {"id": 4, "map_id": 3, "map_slug": "scorched-earth", "name": "Desert Dunes", "category": "desert", "biome": "desert", "description": "Vast open dunes with little cover."},
    {"id": 5, "map_id": 3, "map_slug": "scorched-earth", "name": "World Scar", "category": "canyons", "biome": "canyon", "description": "A massive canyon cutting through the desert."},
    {"id": 6, "map_id": 2, "map_slug": "the-center", "name": "Fertile Chamber", "category": "caves", "biome": "underground", "description": "Lush underground cavern."},
    {"id": 7, "map_id": 2, "map_slug": "the-center", "name": "The Surface", "category": "plains", "biome": "grassland", "description": "Open grassland above the floating island."},
    {"id": 8, "map_id": 4, "map_slug": "ragnarok", "name": "Highlands", "category": "mountains", "biome": "highland", "description": "Rolling highlands and castle ruins."},
    {"id": 9, "map_id": 4, "map_slug": "ragnarok", "name": "Wyvern Trench", "category": "canyons", "biome": "canyon", "description": "Deep trench home to wyverns."},
]

CAVES = [
    {"id": 1, "map_id": 1, "map_slug": "the-island", "name": "Lava Cave", "type": "lava", "difficulty": "hard", "description": "Artifact of the Massive.", "image_url": None, "has_artifact": True, "coordinates": "70.6, 86.1"},
    {"id": 2, "map_id": 1, "map_slug": "the-island", "name": "Central Cave", "type": "artifact", "difficulty": "medium", "description": "Artifact of the Hunter.", "image_url": None, "has_artifact": True, "coordinates": "41.5, 46.9"},
]

RESOURCES = [
    {"id": 1, "map_id": 1, "map_slug": "the-island", "name": "Metal Node", "type": "metal", "quality": "normal", "abundance": "common", "coordinates": None, "description": "Metal nodes on The Island"},
    {"id": 2, "map_id": 1, "map_slug": "the-island", "name": "Crystal Node", "type": "crystal", "quality": "normal", "abundance": "common", "coordinates": None, "description": "Crystal nodes on The Island"},
]

OBELISKS = [
    {"id": 1, "map_id": 1, "map_slug": "the-island", "name": "Red Obelisk", "color": "red", "coordinates": "79.8, 17.4", "description": "Red Obelisk on The Island"},
    {"id": 2, "map_id": 1, "map_slug": "the-island", "name": "Blue Obelisk", "color": "blue", "coordinates": "25.5, 25.6", "description": "Blue Obelisk on The Island"},
    {"id": 3, "map_id": 1, "map_slug": "the-island", "name": "Green Obelisk", "color": "green", "coordinates": "59.1, 72.3", "description": "Green Obelisk on The Island"},
]

SUPPLY_DROPS = [
    {"id": 1, "map_id": 1, "map_slug": "the-island", "quality": "white", "level_requirement": 3, "coordinates": None, "description": "white supply drop on The Island"},
    {"id": 2, "map_id": 1, "map_slug": "the-island", "quality": "red", "level_requirement": 70, "coordinates": None, "description": "red supply drop on The Island"},
]

BASE_SPOTS = [
    {"id": 1, "map_id": 1, "map_slug": "the-island", "name": "Hidden Lake", "rating": 9.0, "description": "Sheltered lake with nearby metal.", "coordinates": "47.0, 23.0", "pros": "Water, metal", "cons": "Busy server spot"},
    {"id": 2, "map_id": 1, "map_slug": "the-island", "name": "Herbivore Island", "rating": 7.5, "description": "Safe island with passive wildlife.", "coordinates": "78.0, 48.0", "pros": "Safe", "cons": "Few resources"},
]

MAP_LOCATIONS = [
    {"id": 1, "map_id": 4, "map_slug": "ragnarok", "name": "Green Obelisk", "category": "obelisk", "subcategory": "green", "latitude": 25.5, "longitude": 25.6, "description": "Green obelisk", "rarity": None, "difficulty": "easy"},
    {"id": 2, "map_id": 4, "map_slug": "ragnarok", "name": "Metal Rich Mountain", "category": "resource", "subcategory": "metal", "latitude": 35.2, "longitude": 45.8, "description": "Dense metal nodes", "rarity": "common", "difficulty": "medium"},
    {"id": 3, "map_id": 4, "map_slug": "ragnarok", "name": "Rex Valley", "category": "creature", "subcategory": "rex", "latitude": 40.1, "longitude": 55.3, "description": "Frequent Rex spawns", "rarity": "uncommon", "difficulty": "hard"},
    {"id": 4, "map_id": 1, "map_slug": "the-island", "name": "Herbivore Island", "category": "base_spot", "subcategory": None, "latitude": 78.0, "longitude": 48.0, "description": "Safe starter area", "rarity": None, "difficulty": "easy"},
]
