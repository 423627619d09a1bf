from .outputs_from_exports import outputs_from_exports, serialize_exports
