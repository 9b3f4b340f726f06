from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, Text

from db import Base, BigIntPK


class MenuItem(Base):
    """
    A dish or drink on the café menu.

    name is unique because the browser cart keys line items by name; two
    menu items sharing a name would merge in the cart.
    """

    __tablename__ = "menu_items"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    category = Column(Text, nullable=False)
    price_cents = Column(BigInteger, nullable=False)
    image_url = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_menu_item_price"),
    )

    def __repr__(self) -> str:
        return f"<MenuItem id={self.id} name={self.name!r} price_cents={self.price_cents}>"
