"""Read-time reconciliation of gateway instance state into the local store.

Remote wins on ``status`` and ``phone``; every other column is local. Rows
that only exist locally are left alone, so a deletion made directly on the
gateway never propagates through this path.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.base import InstanceStatus
from modules.gateway.client import EvolutionClient, remote_instances
from modules.instances.models import Instance

log = logging.getLogger("zap.api")


def list_local(db: Session) -> list[Instance]:
    return db.query(Instance).order_by(Instance.created_at.desc()).all()


def merge_remote(db: Session, remote: list[dict]) -> int:
    """Upsert remote instances by name. Returns the number of inserted rows.

    Caller owns the transaction.
    """
    by_name = {inst.name: inst for inst in db.query(Instance).all()}
    inserted = 0
    for entry in remote:
        name = entry["instanceName"]
        status = InstanceStatus.from_remote(entry.get("status"))
        phone = entry.get("owner")

        local = by_name.get(name)
        if local is not None:
            local.status = status
            local.phone = phone
            continue

        local = Instance(name=name, status=status, phone=phone)
        db.add(local)
        by_name[name] = local
        inserted += 1
    return inserted


async def sync_instances(db: Session, gateway: EvolutionClient) -> list[Instance]:
    """Pull the gateway's instance list, merge it, and return all local rows.

    Gateway failures are absorbed: the stale local list is served instead.
    """
    result = await gateway.fetch_instances()
    if not result.ok or not isinstance(result.data, list):
        log.warning(f"Instance sync skipped, gateway fetch failed: {result.error}")
        return list_local(db)

    try:
        inserted = merge_remote(db, remote_instances(result.data))
        db.commit()
        if inserted:
            log.info(f"Instance sync adopted {inserted} remote-only instance(s)")
    except SQLAlchemyError:
        db.rollback()
        log.warning("Instance sync write-back failed, serving local state", exc_info=True)

    return list_local(db)
