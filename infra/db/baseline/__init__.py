from infra.db.baseline.mapper import baseline_from_orm, baseline_to_orm

__all__ = ["baseline_from_orm", "baseline_to_orm"]
