"""
Seed script to populate the default roles.

Run this script after database initialization so users can be assigned
one of the standard roles.

Usage:
    python -m scripts.seed_roles
"""
import asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db, init_db
from app.features.roles.models import Role
from app.utils import get_logger, setup_logging


log = get_logger(__name__)


DEFAULT_ROLES = {
    "admin": "Full access to the user directory",
    "manager": "Manages users and their permissions",
    "editor": "Edits records",
    "viewer": "Read-only access",
}


async def seed_roles(db: AsyncSession) -> dict[str, Role]:
    """
    Create the default roles that do not exist yet.
    
    Returns:
        Dictionary mapping role names to Role objects, existing ones included
    """
    log.info("Creating default roles...")
    roles_map = {}
    
    for name, description in DEFAULT_ROLES.items():
        result = await db.execute(select(Role).where(Role.name == name))
        existing = result.scalars().first()
        
        if existing:
            log.debug(f"Role '{name}' already exists, skipping")
            roles_map[name] = existing
            continue
        
        role = Role(name=name, description=description)
        db.add(role)
        roles_map[name] = role
        log.info(f"Created role: {name}")
    
    await db.commit()
    log.info(f"{len(roles_map)} default roles in place")
    return roles_map


async def main():
    """Create tables and seed roles."""
    setup_logging()
    log.info("Starting role seeding...")
    await init_db()
    
    async for db in get_db():
        try:
            await seed_roles(db)
        except Exception as e:
            log.error(f"Error seeding roles: {e}", exc_info=True)
            raise
        
        break  # Only use first session


if __name__ == "__main__":
    asyncio.run(main())
