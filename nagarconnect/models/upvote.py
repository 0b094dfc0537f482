import uuid
from sqlmodel import Field, SQLModel, UniqueConstraint
from datetime import datetime, timezone


class IssueUpvote(SQLModel, table=True):
    __tablename__ = "issue_upvotes"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    issue_id: uuid.UUID = Field(foreign_key="issues.id", index=True, ondelete="CASCADE")
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    __table_args__ = (
        # At most one upvote per user per issue
        UniqueConstraint(
            "issue_id",
            "user_id",
            name="uq_issue_user_upvote"
        ),
    )
