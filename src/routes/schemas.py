from email_validator import EmailNotValidError, validate_email
from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates

from cart.pricing import MAX_AMOUNT
from models.order import ORDER_STATUSES


def _check_email(value: str) -> None:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(str(e))


class ContactSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    email = fields.Str(required=True, validate=validate.Length(max=320))
    message = fields.Str(required=True, validate=validate.Length(min=1, max=5000))

    @validates("email")
    def validate_email_address(self, value, **kwargs):
        _check_email(value)


class OrderItemSchema(Schema):
    """One checkout transfer item: {name, unitPrice, quantity, imageUrl}"""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    unit_price = fields.Decimal(
        required=True, data_key="unitPrice", places=2, validate=validate.Range(min=0, max=MAX_AMOUNT)
    )
    quantity = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
    image_url = fields.Str(load_default=None, allow_none=True, data_key="imageUrl")


class OrderCreateSchema(Schema):
    customer_name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    customer_email = fields.Str(load_default=None, allow_none=True)
    notes = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=2000))
    items = fields.List(fields.Nested(OrderItemSchema), required=True)

    @validates("customer_email")
    def validate_customer_email(self, value, **kwargs):
        if value is not None:
            _check_email(value)


class OrderUpdateSchema(Schema):
    status = fields.Str(validate=validate.OneOf(ORDER_STATUSES))
    customer_name = fields.Str(validate=validate.Length(min=1, max=200))
    customer_email = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True, validate=validate.Length(max=2000))

    @validates("customer_email")
    def validate_customer_email(self, value, **kwargs):
        if value is not None:
            _check_email(value)
