"""
Worksheet configuration.

The options here are sent with every values request issued for a worksheet.
"""

from dataclasses import dataclass

from gspread.utils import ValueInputOption, ValueRenderOption


@dataclass
class WorksheetConfig:
    """Per-worksheet request options.

    Attributes:
        value_input_option: How written values are interpreted by Google Sheets
            (``USER_ENTERED`` parses numbers, dates and formulas, ``RAW`` stores
            the text as-is)
        value_render_option: How read values are rendered (``FORMATTED_VALUE``,
            ``UNFORMATTED_VALUE`` or ``FORMULA``)
    """
    value_input_option: ValueInputOption = ValueInputOption.user_entered
    value_render_option: ValueRenderOption = ValueRenderOption.formatted

    def __post_init__(self) -> None:
        # Accept plain strings such as "RAW"; invalid ones raise ValueError
        self.value_input_option = ValueInputOption(self.value_input_option)
        self.value_render_option = ValueRenderOption(self.value_render_option)
