from . import admin, creatures, health, interactive_maps, maps, regions, search, taming
from .catalog import ENDPOINTS, available_endpoints  # noqa: F401 re-export

BLUEPRINT_FACTORIES = (
    health.build_blueprint,
    creatures.build_blueprint,
    maps.build_blueprint,
    regions.build_blueprint,
    search.build_blueprint,
    taming.build_blueprint,
    interactive_maps.build_blueprint,
    admin.build_blueprint,
)


def register_blueprints(app, ctx) -> None:
    for factory in BLUEPRINT_FACTORIES:
        app.register_blueprint(factory(ctx))


__all__ = ["BLUEPRINT_FACTORIES", "ENDPOINTS", "available_endpoints", "register_blueprints"]
