from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .conflicts.detector import ConflictDetector
from .core.constants import DEFAULT_SWEEP_BATCH_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.service import PayrollService
from .schedules.completion import CompletionSweepService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .stores.mysql_store_repository import MySQLStoreRepository
from .swaps.mysql_swap_repository import MySQLSwapRepository
from .swaps.service import SwapService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    stores_repo: MySQLStoreRepository
    shifts_repo: MySQLShiftRepository
    employees_repo: MySQLEmployeeRepository
    schedules_repo: MySQLScheduleRepository
    swaps_repo: MySQLSwapRepository

    schedule_service: ScheduleService
    completion_service: CompletionSweepService
    payroll_service: PayrollService
    swap_service: SwapService


def build_container(
    *,
    db_config: dict,
    default_capacity: Optional[int] = None,
    sweep_batch_size: int = DEFAULT_SWEEP_BATCH_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    stores_repo = MySQLStoreRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)
    swaps_repo = MySQLSwapRepository(conn)

    detector = ConflictDetector()
    schedule_service = ScheduleService(
        schedules_repo,
        shifts_repo,
        stores_repo,
        detector=detector,
        default_capacity=default_capacity,
    )
    completion_service = CompletionSweepService(schedules_repo, batch_size=sweep_batch_size)
    payroll_service = PayrollService(employees_repo, schedules_repo, shifts_repo)
    swap_service = SwapService(
        swaps_repo,
        schedules_repo,
        shifts_repo,
        stores_repo,
        employees_repo,
        detector=detector,
        default_capacity=default_capacity,
    )

    return Container(
        conn=conn,
        stores_repo=stores_repo,
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        swaps_repo=swaps_repo,
        schedule_service=schedule_service,
        completion_service=completion_service,
        payroll_service=payroll_service,
        swap_service=swap_service,
    )
