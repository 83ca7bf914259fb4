"""Endpoint catalogue served by ``/api/docs`` and unknown-route 404s."""

ENDPOINTS = {
    "creatures": {
        "GET /api/creatures": "List creatures (page, limit, tameable, rideable, temperament, sort=name|health|damage)",
        "GET /api/creatures/search": "Search creatures by name or description (q, limit)",
        "GET /api/creatures/<slug>": "Creature details with stats, taming data and taming foods",
    },
    "maps": {
        "GET /api/maps": "List maps (page, limit, type, official, expansion)",
        "GET /api/maps/<slug>": "Map details",
        "GET /api/maps/<slug>/regions": "Regions on a map (category)",
        "GET /api/maps/<slug>/caves": "Caves on a map (type, difficulty)",
        "GET /api/maps/<slug>/resources": "Resource nodes on a map (type, quality)",
        "GET /api/maps/<slug>/obelisks": "Obelisks on a map",
        "GET /api/maps/<slug>/supply-drops": "Supply drops on a map (quality)",
        "GET /api/maps/<slug>/base-spots": "Base spots on a map (rating_min)",
    },
    "regions": {
        "GET /api/regions": "Regions for one map (map or map_id, biome, page, limit)",
        "GET /api/regions/<id>": "Region details",
    },
    "search": {
        "GET /api/search": "Search creatures, maps and regions (q, type=all|creature|map|region, page, limit)",
    },
    "taming": {
        "GET /api/taming": "Tameable creatures with taming summary",
        "GET /api/taming/<slug>": "Taming data for a creature",
        "GET /api/taming/<slug>/optimal": "Taming foods ranked by effectiveness",
        "POST /api/taming/calculate": "Estimate taming cost ({creature, level, food})",
    },
    "interactive-maps": {
        "GET /api/interactive-maps/<slug>/interactive": "Map locations, user locations and routes (category, user_id)",
        "GET /api/interactive-maps/<slug>/locations/<category>": "Locations by category (subcategory, rarity, difficulty)",
        "POST /api/interactive-maps/<slug>/user-locations": "Save a user location",
        "GET /api/interactive-maps/<slug>/nearest": "Nearest locations (lat, lng, radius, category)",
        "POST /api/interactive-maps/<slug>/route": "Plan a route ({start, end, travel_mode})",
    },
    "admin": {
        "GET /api/admin/population-status": "Row counts and population status",
        "POST /api/admin/populate-data": "Queue a population job ({type})",
        "POST /api/admin/sync-data": "Queue a full re-population job",
        "GET /api/admin/jobs": "Recent population jobs",
        "GET /api/admin/jobs/<job_id>": "Population job status",
        "POST /api/admin/validate-database": "Data validation report",
        "GET /api/admin/stats": "Row counts per table",
        "POST /api/admin/refresh-indexes": "Refresh planner statistics",
        "POST /api/admin/reset-database": "Drop, recreate and re-seed maps",
    },
    "meta": {
        "GET /api/health": "Service and database health",
        "GET /api/docs": "This catalogue",
        "GET /": "API information",
    },
}


def available_endpoints():
    return [endpoint for group in ENDPOINTS.values() for endpoint in group]
