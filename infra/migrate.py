# infra/migrate.py
from pathlib import Path
import logging
import sys

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)


def _app_dir() -> Path:
    """
    Returns the directory holding the ``migration`` folder.
    - For frozen builds, prefer sys._MEIPASS, then the executable's folder.
    - In dev: return the project root (infra -> project root).
    """
    if getattr(sys, "frozen", False):
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass).resolve()
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def run_migrations(db_url: str, revision: str = "head") -> None:
    app_dir = _app_dir()
    candidates = [app_dir / "migration", app_dir / "_internal" / "migration"]

    script_location = next((c for c in candidates if c.exists()), None)
    if script_location is None:
        raise RuntimeError(
            "Alembic script_location missing. Tried the following locations: "
            + ", ".join(str(p) for p in candidates)
        )

    alembic_ini = script_location / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    cfg.attributes["configure_logger"] = False

    logger.info("Upgrading schema at %s to %s", db_url, revision)
    command.upgrade(cfg, revision)
