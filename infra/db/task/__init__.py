from infra.db.task.mapper import task_from_orm, task_to_orm

__all__ = ["task_from_orm", "task_to_orm"]
