"""
Prompt templates for the staging flows
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Region:
    """Rectangle in absolute pixel coordinates of the referenced image"""

    x: float
    y: float
    width: float
    height: float

    def describe(self) -> str:
        return (
            f"(x:{round(self.x)}, y:{round(self.y)}, "
            f"width:{round(self.width)}, height:{round(self.height)})"
        )


class StagingPrompts:
    """Prompts sent to Gemini by each flow"""

    LIST_VISIBLE_ITEMS = (
        "List all furniture and decor items visible in this room as a JSON array of strings. "
        "Only output the JSON array, nothing else."
    )

    LIST_FURNISHED_ITEMS = (
        "List every furniture and decor item in this room as a JSON array of searchable product descriptions. "
        'Be specific (e.g., "mid-century walnut coffee table" not just "coffee table"). '
        "Only output the JSON array, nothing else."
    )

    @staticmethod
    def get_clear_room_prompt(detected_items=None) -> str:
        prompt = (
            "Generate this same room with all furniture and decor removed. "
            "Keep the room structure intact: walls, floors, windows, doors, built-in features. "
            "The room should look empty and clean."
        )
        if detected_items:
            prompt += f" Items to remove include: {', '.join(detected_items)}."
        return prompt

    @staticmethod
    def get_furnish_prompt(style: str) -> str:
        return (
            f"Furnish this empty room with the following style: {style}. "
            "Add appropriate furniture, decor, and accessories that match this style. "
            "Make it look like a professionally designed, lived-in space. "
            "Keep the walls, windows, doors, floor and camera perspective exactly as they are."
        )

    @staticmethod
    def get_clear_region_prompt(region: Region) -> str:
        return (
            "Remove all furniture, decor, and items in the rectangular region at coordinates "
            f"{region.describe()}. "
            "Keep the room structure intact - walls, floors, windows, doors, and built-in features. "
            "Leave the area empty and clean. Keep everything outside this region exactly the same."
        )

    @staticmethod
    def get_edit_prompt(instruction: str) -> str:
        return (
            f"Edit this room image according to the following instruction: {instruction}. "
            "Maintain the same overall style, lighting, and perspective. "
            "Make the edit look natural and seamlessly integrated."
        )

    @staticmethod
    def get_refine_prompt(region: Region, replacement: str) -> str:
        return (
            f"In this room image, there is a region at coordinates {region.describe()} that needs to be changed. "
            f"Replace the item in that region with: {replacement}. "
            "Keep everything outside this region exactly the same. "
            "Maintain the same lighting, perspective, and style as the rest of the room."
        )
