"""Players feature module.

Read-only catalog queries over stored darts players: ranking-bounded listing,
lookup by identifier, and substring search over countries and nicknames.
"""

from .router import router as players_router
from .service import PlayerService
from .orm_models import PlayerORM
from .schemas import PlayerResponse
from .dependencies import get_player_service, PlayerServiceDep
from .seed import load_seed_records, seed_players

__all__ = [
    # Router
    "players_router",
    # Service
    "PlayerService",
    # Models
    "PlayerORM",
    # Schemas
    "PlayerResponse",
    # Dependencies
    "get_player_service",
    "PlayerServiceDep",
    # Seed
    "load_seed_records",
    "seed_players",
]
