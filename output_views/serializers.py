import base64

from marshmallow import Schema, fields, validate, post_dump


class OptionSchema(Schema):
    text = fields.String()
    value = fields.Raw()


class InteractiveParameterSchema(Schema):
    """Dumps a ``Control`` for the portal front end."""

    name = fields.String()
    value = fields.Raw()
    type = fields.Function(lambda control: control.kind.value)
    label = fields.String()
    help = fields.Function(lambda control: control.descriptor.help)
    min = fields.Function(lambda control: control.descriptor.min)
    max = fields.Function(lambda control: control.descriptor.max)
    step = fields.Raw()
    options = fields.Nested(OptionSchema, many=True, allow_none=True)

    @post_dump
    def remove_empty(self, data, **kwargs):
        return {k: v for k, v in data.items() if v is not None}


def dump_payload(view):
    payload = view.data
    if isinstance(payload.get("image"), bytes):
        payload["image"] = base64.b64encode(payload["image"]).decode("ascii")
    return payload


class RenderedViewSchema(Schema):
    label = fields.String()
    display_type = fields.Function(lambda view: view.display_type.value)
    data = fields.Function(dump_payload)
    interactive = fields.Function(
        lambda view: InteractiveParameterSchema(many=True).dump(view.controls)
    )
    error = fields.Function(lambda view: view.error.todict() if view.error else None)
    fallback = fields.Boolean()


class UpdateSchema(Schema):
    """Loads a single parameter edit sent by the front end."""

    name = fields.String(required=True, validate=validate.Length(min=1))
    value = fields.Raw(required=True, allow_none=False)
