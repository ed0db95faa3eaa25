# frontend/utils/tag_factory.py
from core.frame import AxisId


class TagFactory:
    @staticmethod
    def get_layer_tag(canvas_id: str, layer: str) -> str:
        return f"layer_{canvas_id}_{layer}"

    @staticmethod
    def get_axis_layer_tag(canvas_id: str, axis_id: AxisId) -> str:
        return f"layer_{canvas_id}_axis_{axis_id.value}"
