import logging

import dearpygui.dearpygui as dpg

from navigation.grid import HexGrid
from navigation.nav import Nav
from worldgen.world import World

from .camera import Camera, biome_rgba, grayscale_color, hex_corners

logger = logging.getLogger("hexworld.ui")
logger.addHandler(logging.NullHandler())

# on-screen hex radius in pixels at zoom 1
HEX_SIZE = 18
SELECT_COLOR = (255, 255, 0, 255)
PATH_COLOR = (255, 80, 40, 255)


class MapView:
    """
    Draws the tiles of a ``World`` within ``radius`` of the origin.

    Left click selects a tile, right click routes a path over land from the
    selection to the clicked tile. Tab cycles the terrain and raw field layers.
    """

    def __init__(self, world: World, radius=12, size=(900, 700)):
        self.world = world
        self.radius = radius
        self.size = size
        tile_size = world.settings.tile_size
        self.camera = Camera(*size, pixels_per_unit=HEX_SIZE / tile_size)
        self.grid = HexGrid(tile_size, flat=True)
        self.coords = self.grid.spiral((0, 0), radius)
        self.visible = set(self.coords)
        self.nav = Nav(self.grid, in_bounds=self.visible.__contains__)
        self.nav.set_blockers(world.water_coords(self.coords))
        self.selected = None
        self.path = []
        self.layers = ["terrain", "elevation", "temperature", "moisture"]
        self.layer_index = 0

        dpg.create_context()
        dpg.create_viewport(title="Hex World", width=size[0], height=size[1])
        with dpg.window(tag="_map_window", width=size[0], height=size[1], no_move=True, no_resize=True, no_title_bar=True):
            self.canvas = dpg.add_drawlist(width=size[0], height=size[1], tag="_canvas")
        with dpg.window(tag="_info_window", pos=(10, 10), width=240, height=90, no_resize=True, no_move=True, no_title_bar=True):
            dpg.add_text("Layer: terrain", tag="_layer_text")
            dpg.add_text("", tag="_tile_text")
        dpg.set_primary_window("_map_window", True)
        with dpg.handler_registry():
            dpg.add_mouse_click_handler(callback=self._on_click)
            dpg.add_mouse_drag_handler(button=dpg.mvMouseButton_Middle, callback=self._on_drag)
            dpg.add_mouse_wheel_handler(callback=self._on_scroll)
            dpg.add_key_press_handler(callback=self._on_key)
        dpg.setup_dearpygui()
        dpg.show_viewport()

    # event callbacks
    def _on_click(self, sender, app_data):
        coord = self.coord_at_pos(dpg.get_mouse_pos())
        if coord not in self.visible:
            return
        if app_data == dpg.mvMouseButton_Left:
            self.selected = coord
            self.path = []
            tile = self.world.get(*coord)
            dpg.set_value("_tile_text", f"{tile.biome.label} ({tile.q}, {tile.r})\nh={tile.elevation:.2f} t={tile.temperature:.2f} m={tile.moisture:.2f}")
        elif app_data == dpg.mvMouseButton_Right and self.selected:
            self.path = self.nav.pathfind(self.selected, coord)
            if not self.path:
                logger.info("No land route from %s to %s", self.selected, coord)

    def _on_drag(self, sender, app_data):
        dx, dy = app_data[1], app_data[2]
        self.camera.pan(dx, dy)

    def _on_scroll(self, sender, app_data):
        pos = dpg.get_mouse_pos()
        self.camera.change_zoom(app_data * 0.1, pos)

    def _on_key(self, sender, app_data):
        if app_data == dpg.mvKey_Tab:
            self.layer_index = (self.layer_index + 1) % len(self.layers)
            dpg.set_value("_layer_text", f"Layer: {self.layers[self.layer_index]}")
        elif app_data == dpg.mvKey_Escape:
            dpg.stop_dearpygui()

    def coord_at_pos(self, pos):
        return self.grid.to_coord(self.camera.unproject(pos))

    def screen_pos(self, coord):
        return self.camera.project(self.grid.to_world(coord))

    def draw_hex(self, coord, color, width=0, fill=True):
        x, y = self.screen_pos(coord)
        corners = hex_corners(x, y, self.grid.size * self.camera.scale)
        corners.append(corners[0])
        dpg.draw_polygon(
            corners,
            color=color if not fill else (0, 0, 0, 255),
            fill=color if fill else (0, 0, 0, 0),
            thickness=width or 1,
            parent=self.canvas,
        )

    def tile_color(self, tile):
        layer = self.layers[self.layer_index]
        if layer == "terrain":
            return biome_rgba(tile.biome.label)
        return grayscale_color(getattr(tile, layer))

    def draw_path(self):
        points = [self.screen_pos(c) for c in self.path]
        if len(points) > 1:
            dpg.draw_polyline(points, color=PATH_COLOR, thickness=3, parent=self.canvas)

    def draw_map(self):
        dpg.delete_item(self.canvas, children_only=True)
        for tile in self.world.tiles_at(self.coords):
            self.draw_hex(tile.coord, self.tile_color(tile))
        self.draw_path()
        if self.selected:
            self.draw_hex(self.selected, SELECT_COLOR, 3, fill=False)

    def run(self):
        while dpg.is_dearpygui_running():
            self.draw_map()
            dpg.render_dearpygui_frame()
        dpg.destroy_context()
        return self.selected


__all__ = ["HEX_SIZE", "MapView"]
