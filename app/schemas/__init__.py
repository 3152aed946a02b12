from app.schemas.common import LocalizedText, WireModel, to_wire, wire_keys  # noqa: F401
