from sqlalchemy import Boolean, CheckConstraint, Column, Integer, Text

from .db import Base


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("length(description) > 0", name="ck_tasks_description_not_empty"),
        # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows again
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, description={self.description!r}, completed={self.completed!r})"
