from marshmallow import Schema, fields


class SenderOutSchema(Schema):
    id = fields.String()
    username = fields.String()


class NotificationOutSchema(Schema):
    id = fields.String()
    type = fields.Method("get_type")
    event_id = fields.String()
    is_read = fields.Boolean()
    created_at = fields.DateTime()
    sender = fields.Nested(SenderOutSchema)

    def get_type(self, obj):
        return getattr(obj.type, "value", obj.type)
