"""
Daily synthetic visitor job.

Run once per day from an external scheduler, e.g. a crontab entry:

    0 0 * * * cattery-synthetic-visits
"""
import argparse
from datetime import date

from app.core.analytics import create_daily_synthetic_visits
from app.database import Base, SessionLocal, engine
from app.models.synthetic_visit import SyntheticVisit
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def run(date_str: str | None = None) -> dict:
    Base.metadata.create_all(bind=engine, tables=[SyntheticVisit.__table__])

    db = SessionLocal()
    try:
        result = create_daily_synthetic_visits(db, date_str)

        if result["success"]:
            logger.info("Synthetic visits created: %s", result["count"])
        else:
            logger.info("%s (%s)", result["message"], result["existing"].date)
    finally:
        db.close()

    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the synthetic visitor boost for one day.")
    parser.add_argument("--date", type=_iso_date, help="Target day as YYYY-MM-DD (defaults to today)")
    args = parser.parse_args(argv)

    run(args.date)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
