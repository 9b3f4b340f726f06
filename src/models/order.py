from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Text

from db import Base, BigIntPK, JSONDocument

ORDER_STATUSES = ("pending", "preparing", "completed", "cancelled")


class Order(Base):
    """
    An entry in the order ledger, created from a checkout handoff.

    items holds the line items exactly as the checkout view received them
    (name, unitPrice, quantity, imageUrl). There is no product foreign key:
    the cart identifies products by name only.

    total_cents is computed server-side from items at creation and stored
    so later menu price changes do not alter historical totals.
    """

    __tablename__ = "orders"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    customer_name = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default="pending")
    items = Column(JSONDocument, nullable=False, default=list)
    total_cents = Column(BigInteger, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending','preparing','completed','cancelled')",
            name="ck_order_status",
        ),
        CheckConstraint("total_cents >= 0", name="ck_order_total"),
    )

    def __repr__(self) -> str:
        return (
            f"<Order id={self.id} status={self.status!r} "
            f"total_cents={self.total_cents}>"
        )
