"""
Sample table seeding

Populates the dining room on first start so the API is usable out of the box.
Runs only when no table exists yet.
"""

from dataclasses import dataclass
from typing import List

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.value_object.capacity import Capacity
from src.service.table_reservation.domain.value_object.identifiers import TableId


@dataclass
class TableConfig:
    """Table seed configuration"""
    id: str
    capacity: int
    location: str
    is_active: bool = True


SAMPLE_TABLES = [
    # Couples
    TableConfig(id='T001', capacity=2, location='Indoor'),
    TableConfig(id='T002', capacity=2, location='Indoor'),
    # Small groups
    TableConfig(id='T003', capacity=4, location='Indoor'),
    TableConfig(id='T004', capacity=4, location='Indoor'),
    TableConfig(id='T005', capacity=4, location='Indoor'),
    TableConfig(id='T006', capacity=6, location='Indoor'),
    TableConfig(id='T007', capacity=6, location='Indoor'),
    # Large groups
    TableConfig(id='T008', capacity=8, location='Outdoor'),
    TableConfig(id='T009', capacity=8, location='Outdoor'),
    TableConfig(id='T010', capacity=10, location='Outdoor'),
    TableConfig(id='T011', capacity=12, location='VIP'),
    # Under maintenance
    TableConfig(id='T012', capacity=2, location='Indoor - Maintenance', is_active=False),
]


async def seed_sample_tables(table_repo: ITableRepo) -> List[Table]:
    if await table_repo.list_all():
        Logger.base.info('🪑 [SEED] Tables already present, skipping sample data')
        return []

    seeded = []
    for config in SAMPLE_TABLES:
        table = Table(
            id=TableId(config.id),
            capacity=Capacity(config.capacity),
            is_active=config.is_active,
            location=config.location,
        )
        seeded.append(await table_repo.save(table=table))
        Logger.base.debug(
            f'[SEED] Created table {config.id} (capacity {config.capacity}) at {config.location}'
        )

    Logger.base.info(f'🪑 [SEED] Created {len(seeded)} sample tables')
    return seeded
