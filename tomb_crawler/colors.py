"""Named RGB colors.

The simulation never interprets colors; they are carried on entities and
messages so a renderer can draw them.
"""

from tomb_crawler.types import Color

WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
DARK_RED: Color = (191, 0, 0)
ORANGE: Color = (255, 127, 0)
YELLOW: Color = (255, 255, 0)
LIGHT_YELLOW: Color = (255, 255, 115)
LIGHT_GREEN: Color = (115, 255, 115)
GREEN: Color = (0, 255, 0)
DESATURATED_GREEN: Color = (63, 127, 63)
DARKER_GREEN: Color = (0, 127, 0)
LIGHT_BLUE: Color = (115, 115, 255)
LIGHT_CYAN: Color = (115, 255, 255)
VIOLET: Color = (127, 0, 255)
LIGHT_VIOLET: Color = (185, 115, 255)
SKY: Color = (0, 191, 255)
DARKER_ORANGE: Color = (127, 63, 0)
