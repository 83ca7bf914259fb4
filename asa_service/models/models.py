"""
project: ASA Service
module: models.py
https://github.com/asa-service/asa-service
License: MIT

Database models for the ARK: Survival Ascended reference database.

Notes:
- Rows are written by the population service and the admin API only.
- JSON-ish columns (preferred foods, route waypoints, job results) use the
  portable ``db.JSON`` type so the same models run on PostgreSQL and SQLite.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import declared_attr

from asa_service import db


def utcnow():
    """Naive UTC timestamp (columns are ``TIMESTAMP WITHOUT TIME ZONE``)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() if value else None


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Map(TimestampMixin, db.Model):
    """A playable ARK map.

    Attributes:
        slug: Kebab-case unique key used in URLs (``the-island``).
        wiki_page: Page title on the wiki (``The_Island``), used by the scrapers.
        map_type: ``official`` | ``expansion`` | ``custom``.
    """

    __tablename__ = "maps"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    wiki_page = db.Column(db.String(160), nullable=True)
    map_type = db.Column(db.String(20), nullable=False, default="official")
    is_official = db.Column(db.Boolean, nullable=False, default=True)
    is_expansion = db.Column(db.Boolean, nullable=False, default=False)
    release_date = db.Column(db.Date, nullable=True)
    size_km = db.Column(db.Float, nullable=True)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "type": self.map_type,
            "is_official": self.is_official,
            "is_expansion": self.is_expansion,
            "release_date": _iso(self.release_date),
            "size_km": self.size_km,
            "description": self.description,
            "image_url": self.image_url,
            "updated_at": _iso(self.updated_at),
        }


class Creature(TimestampMixin, db.Model):
    """A creature with its base stats and taming flags."""

    __tablename__ = "creatures"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    temperament = db.Column(db.String(40), nullable=True)
    diet = db.Column(db.String(40), nullable=True)
    is_tameable = db.Column(db.Boolean, nullable=False, default=False)
    is_rideable = db.Column(db.Boolean, nullable=False, default=False)
    is_breedable = db.Column(db.Boolean, nullable=False, default=False)
    taming_method = db.Column(db.String(40), nullable=True)
    health = db.Column(db.Float, nullable=True)
    stamina = db.Column(db.Float, nullable=True)
    oxygen = db.Column(db.Float, nullable=True)
    food = db.Column(db.Float, nullable=True)
    weight = db.Column(db.Float, nullable=True)
    melee_damage = db.Column(db.Float, nullable=True)
    movement_speed = db.Column(db.Float, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    wiki_url = db.Column(db.String(500), nullable=True)
    dododex_id = db.Column(db.String(120), nullable=True)

    stats = db.relationship("CreatureStat", backref="creature", lazy=True, order_by="CreatureStat.stat_name")
    taming = db.relationship("TamingData", backref="creature", uselist=False, lazy=True)
    taming_foods = db.relationship("TamingFood", backref="creature", lazy=True, order_by="TamingFood.food_name")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "temperament": self.temperament,
            "diet": self.diet,
            "is_tameable": self.is_tameable,
            "is_rideable": self.is_rideable,
            "is_breedable": self.is_breedable,
            "taming_method": self.taming_method,
            "health": self.health,
            "stamina": self.stamina,
            "oxygen": self.oxygen,
            "food": self.food,
            "weight": self.weight,
            "melee_damage": self.melee_damage,
            "movement_speed": self.movement_speed,
            "image_url": self.image_url,
            "wiki_url": self.wiki_url,
            "dododex_id": self.dododex_id,
        }


class CreatureStat(TimestampMixin, db.Model):
    __tablename__ = "creature_stats"
    __table_args__ = (db.UniqueConstraint("creature_id", "stat_name", name="uq_creature_stat"),)

    id = db.Column(db.Integer, primary_key=True)
    creature_id = db.Column(db.Integer, db.ForeignKey("creatures.id", ondelete="CASCADE"), nullable=False)
    stat_name = db.Column(db.String(60), nullable=False)
    base_value = db.Column(db.Float, nullable=False, default=0)
    per_level_wild = db.Column(db.Float, nullable=False, default=0)
    per_level_tamed = db.Column(db.Float, nullable=False, default=0)

    def to_dict(self):
        return {
            "stat_name": self.stat_name,
            "base_value": self.base_value,
            "per_level_wild": self.per_level_wild,
            "per_level_tamed": self.per_level_tamed,
        }


class TamingData(TimestampMixin, db.Model):
    """Per-creature taming summary (one row per creature).

    Attributes:
        preferred_foods: JSON list of food names, best first.
        kibble_type: Preferred kibble tier (e.g. ``Exceptional Kibble``).
    """

    __tablename__ = "taming_data"

    id = db.Column(db.Integer, primary_key=True)
    creature_id = db.Column(db.Integer, db.ForeignKey("creatures.id", ondelete="CASCADE"), unique=True, nullable=False)
    taming_method = db.Column(db.String(40), nullable=True)
    preferred_foods = db.Column(db.JSON, nullable=True)
    kibble_type = db.Column(db.String(80), nullable=True)
    unconscious_time = db.Column(db.String(80), nullable=True)
    torpor_depletion_rate = db.Column(db.Float, nullable=True)
    feeding_interval = db.Column(db.Float, nullable=True)
    special_requirements = db.Column(db.Text, nullable=True)
    taming_notes = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "method": self.taming_method,
            "preferred_foods": self.preferred_foods or [],
            "kibble": self.kibble_type,
            "unconscious_time": self.unconscious_time,
            "torpor_depletion_rate": self.torpor_depletion_rate,
            "feeding_interval": self.feeding_interval,
            "special_requirements": self.special_requirements,
            "taming_notes": self.taming_notes,
        }


class TamingFood(TimestampMixin, db.Model):
    """Base taming cost of one food for one creature at level 30.

    The calculator scales ``quantity_for_level_1`` and ``taming_time_minutes``
    by level.
    """

    __tablename__ = "creature_taming"
    __table_args__ = (db.UniqueConstraint("creature_id", "food_name", name="uq_creature_taming_food"),)

    id = db.Column(db.Integer, primary_key=True)
    creature_id = db.Column(db.Integer, db.ForeignKey("creatures.id", ondelete="CASCADE"), nullable=False)
    food_name = db.Column(db.String(120), nullable=False)
    effectiveness = db.Column(db.Float, nullable=True)
    quantity_for_level_1 = db.Column(db.Integer, nullable=False, default=0)
    taming_time_minutes = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            "food_name": self.food_name,
            "effectiveness": self.effectiveness,
            "quantity_for_level_1": self.quantity_for_level_1,
            "taming_time_minutes": self.taming_time_minutes,
        }


class CreatureSpawn(TimestampMixin, db.Model):
    __tablename__ = "creature_spawns"
    __table_args__ = (db.UniqueConstraint("creature_id", "map_id", name="uq_creature_spawn"),)

    id = db.Column(db.Integer, primary_key=True)
    creature_id = db.Column(db.Integer, db.ForeignKey("creatures.id", ondelete="CASCADE"), nullable=False)
    map_id = db.Column(db.Integer, db.ForeignKey("maps.id", ondelete="CASCADE"), nullable=False)
    spawn_areas = db.Column(db.Text, nullable=True)
    rarity = db.Column(db.String(40), nullable=True)


class MapChildMixin(TimestampMixin):
    """Shared ``map_id`` foreign key for rows that belong to a map."""

    @declared_attr
    def map_id(cls):
        return db.Column(db.Integer, db.ForeignKey("maps.id", ondelete="CASCADE"), nullable=False, index=True)


class MapRegion(MapChildMixin, db.Model):
    __tablename__ = "map_regions"
    __table_args__ = (db.UniqueConstraint("map_id", "name", name="uq_map_region"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(40), nullable=False, default="other")
    biome = db.Column(db.String(60), nullable=True)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    wiki_url = db.Column(db.String(500), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "category": self.category,
            "biome": self.biome,
            "description": self.description,
            "image_url": self.image_url,
            "wiki_url": self.wiki_url,
        }


class Cave(MapChildMixin, db.Model):
    __tablename__ = "caves"
    __table_args__ = (db.UniqueConstraint("map_id", "name", name="uq_cave"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    cave_type = db.Column(db.String(40), nullable=False, default="standard")
    difficulty = db.Column(db.String(20), nullable=False, default="medium")
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    has_artifact = db.Column(db.Boolean, nullable=False, default=False)
    coordinates = db.Column(db.String(60), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "type": self.cave_type,
            "difficulty": self.difficulty,
            "description": self.description,
            "image_url": self.image_url,
            "has_artifact": self.has_artifact,
            "coordinates": self.coordinates,
        }


class Resource(MapChildMixin, db.Model):
    __tablename__ = "resources"
    __table_args__ = (db.UniqueConstraint("map_id", "name", name="uq_resource"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    resource_type = db.Column(db.String(60), nullable=False)
    quality = db.Column(db.String(20), nullable=True)
    abundance = db.Column(db.String(20), nullable=True)
    coordinates = db.Column(db.String(60), nullable=True)
    description = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "type": self.resource_type,
            "quality": self.quality,
            "abundance": self.abundance,
            "coordinates": self.coordinates,
            "description": self.description,
        }


class Obelisk(MapChildMixin, db.Model):
    __tablename__ = "obelisks"
    __table_args__ = (db.UniqueConstraint("map_id", "name", name="uq_obelisk"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    color = db.Column(db.String(20), nullable=False)
    coordinates = db.Column(db.String(60), nullable=True)
    description = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "color": self.color,
            "coordinates": self.coordinates,
            "description": self.description,
        }


class SupplyDrop(MapChildMixin, db.Model):
    __tablename__ = "supply_drops"
    __table_args__ = (db.UniqueConstraint("map_id", "quality", name="uq_supply_drop"),)

    id = db.Column(db.Integer, primary_key=True)
    quality = db.Column(db.String(20), nullable=False)
    level_requirement = db.Column(db.Integer, nullable=True)
    coordinates = db.Column(db.String(60), nullable=True)
    description = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "quality": self.quality,
            "level_requirement": self.level_requirement,
            "coordinates": self.coordinates,
            "description": self.description,
        }


class BaseSpot(MapChildMixin, db.Model):
    __tablename__ = "base_spots"
    __table_args__ = (db.UniqueConstraint("map_id", "name", name="uq_base_spot"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    rating = db.Column(db.Float, nullable=False, default=0)
    description = db.Column(db.Text, nullable=True)
    coordinates = db.Column(db.String(60), nullable=True)
    pros = db.Column(db.Text, nullable=True)
    cons = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "rating": self.rating,
            "description": self.description,
            "coordinates": self.coordinates,
            "pros": self.pros,
            "cons": self.cons,
        }


class MapLocation(MapChildMixin, db.Model):
    """A curated point of interest on an interactive map (lat/lng in map percent)."""

    __tablename__ = "map_locations"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(40), nullable=False)
    subcategory = db.Column(db.String(40), nullable=True)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    description = db.Column(db.Text, nullable=True)
    rarity = db.Column(db.String(20), nullable=True)
    difficulty = db.Column(db.String(20), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "category": self.category,
            "subcategory": self.subcategory,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "description": self.description,
            "rarity": self.rarity,
            "difficulty": self.difficulty,
        }


class UserLocation(MapChildMixin, db.Model):
    __tablename__ = "user_locations"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(80), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(40), nullable=False, default="custom")
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    is_public = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "user_id": self.user_id,
            "name": self.name,
            "category": self.category,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "notes": self.notes,
            "is_public": self.is_public,
        }


class MapRoute(MapChildMixin, db.Model):
    __tablename__ = "map_routes"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    route_type = db.Column(db.String(40), nullable=True)
    waypoints = db.Column(db.JSON, nullable=True)
    distance_km = db.Column(db.Float, nullable=True)
    estimated_minutes = db.Column(db.Integer, nullable=True)
    difficulty = db.Column(db.String(20), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "map_id": self.map_id,
            "name": self.name,
            "route_type": self.route_type,
            "waypoints": self.waypoints or [],
            "distance_km": self.distance_km,
            "estimated_minutes": self.estimated_minutes,
            "difficulty": self.difficulty,
        }


class SystemStatus(TimestampMixin, db.Model):
    """Latest status per background service (e.g. ``data_population``)."""

    __tablename__ = "system_status"

    id = db.Column(db.Integer, primary_key=True)
    service_name = db.Column(db.String(80), unique=True, nullable=False)
    status = db.Column(db.String(40), nullable=False)
    message = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {"status": self.status, "message": self.message, "updated_at": _iso(self.updated_at)}


class DataSyncLog(db.Model):
    __tablename__ = "data_sync_log"

    id = db.Column(db.Integer, primary_key=True)
    sync_type = db.Column(db.String(60), nullable=False)
    status = db.Column(db.String(40), nullable=False)
    records_processed = db.Column(db.Integer, nullable=False, default=0)
    message = db.Column(db.Text, nullable=True)
    started_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)


class WikiUpdateLog(db.Model):
    __tablename__ = "wiki_update_log"

    id = db.Column(db.Integer, primary_key=True)
    table_name = db.Column(db.String(80), nullable=False)
    record_count = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)


class SystemConfig(db.Model):
    """Key/value configuration rows; holds ``schema_version``."""

    __tablename__ = "system_config"

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(80), unique=True, nullable=False)
    value = db.Column(db.Text, nullable=False)

    @staticmethod
    def get(key: str):
        row = SystemConfig.query.filter_by(key=key).first()
        return row.value if row else None

    @staticmethod
    def set(key: str, value: str):
        row = SystemConfig.query.filter_by(key=key).first()
        if not row:
            row = SystemConfig(key=key, value=value)
            db.session.add(row)
        else:
            row.value = value
        db.session.commit()


class PopulationJob(db.Model):
    """Persisted status of one background population run.

    Attributes:
        job_id: Public identifier returned by the admin API.
        kind: Population type (``all``, ``maps``, ``creatures`` ...).
        status: ``queued`` | ``running`` | ``complete`` | ``error``.
        result: JSON summary (counts per table) once complete.
    """

    __tablename__ = "population_jobs"

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.String(32), unique=True, nullable=False, index=True)
    kind = db.Column(db.String(40), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="queued")
    message = db.Column(db.Text, nullable=True)
    result = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    started_at = db.Column(db.DateTime, nullable=True)
    finished_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self):
        return {
            "job_id": self.job_id,
            "kind": self.kind,
            "status": self.status,
            "message": self.message,
            "result": self.result,
            "created_at": _iso(self.created_at),
            "started_at": _iso(self.started_at),
            "finished_at": _iso(self.finished_at),
        }


# Tables counted by status/stats endpoints, in display order.
CORE_TABLES = {
    "maps": Map,
    "creatures": Creature,
    "map_regions": MapRegion,
    "caves": Cave,
    "resources": Resource,
    "obelisks": Obelisk,
    "supply_drops": SupplyDrop,
    "creature_stats": CreatureStat,
}
