from pathlib import Path

import pytest

from slopecraft.blocklist import (
    BASE_COLOR_NAMES,
    SLOT_COUNT,
    BlockListManager,
    is_valid_block_info,
)


def info(block_id, base_color, **extra):
    data = {"id": block_id, "nameZH": block_id, "nameEN": block_id, "baseColor": base_color}
    data.update(extra)
    return data


class Recorder:
    def __init__(self):
        self.changes = 0
        self.customs = 0

    def change(self):
        self.changes += 1

    def custom(self):
        self.customs += 1


@pytest.fixture
def setup(tmp_path):
    rec = Recorder()
    manager = BlockListManager(rec.change, rec.custom)
    manager.add_blocks(
        [
            info("minecraft:glass", 0),
            info("minecraft:grass_block", 1),
            info("minecraft:slime_block", 1),
            info("minecraft:sand", 2, version=16),
            {"id": "broken"},
        ],
        str(tmp_path),
    )
    return manager, rec


def test_one_group_per_name():
    manager = BlockListManager()
    assert len(manager.groups) == len(BASE_COLOR_NAMES)
    assert manager.block_count() == 0


def test_is_valid_block_info():
    assert is_valid_block_info(info("a", 3))
    assert not is_valid_block_info({"id": "a", "nameZH": "a", "nameEN": "a"})


def test_invalid_entries_skipped(setup):
    manager, _ = setup
    assert manager.block_count() == 4
    assert [bc for bc, _ in manager.all_blocks()] == [0, 1, 1, 2]


def test_defaults_filled(setup):
    manager, _ = setup
    _, sand = manager.all_blocks()[3]
    assert sand.id_old == sand.id
    assert sand.wall_useable is True
    assert sand.version == 16
    assert sand.need_glass is False


def test_block_list_shape(setup):
    manager, _ = setup
    blocks = manager.block_list()
    assert len(blocks) == SLOT_COUNT
    assert blocks[2].id == "minecraft:sand"
    assert blocks[3] is None
    assert blocks[SLOT_COUNT - 1] is None


def test_to_preset_round_trip(setup):
    manager, _ = setup
    manager.set_selected(1, 0)
    preset = manager.to_preset()
    assert len(preset) == SLOT_COUNT
    assert preset[1] == 0
    assert preset[3] is None
    other = BlockListManager()
    other.add_blocks([info("minecraft:grass_block", 1), info("minecraft:slime_block", 1)], ".")
    other.apply_preset(preset)
    assert other.to_preset()[1] == 0


def test_user_click_notifies(setup):
    manager, rec = setup
    manager.groups[1].click(0)
    assert rec.customs == 1
    assert rec.changes == 1
    assert manager.block_list()[1].id == "minecraft:grass_block"


def test_programmatic_changes_are_quiet(setup):
    manager, rec = setup
    manager.set_selected(1, 0)
    manager.set_enabled(1, True)
    assert rec.changes == 0
    assert rec.customs == 0
    assert manager.enable_list()[1] is True


def test_apply_preset(setup):
    manager, rec = setup
    preset = [0] * SLOT_COUNT
    preset[1] = 1
    manager.apply_preset(preset)
    assert rec.changes == 1
    assert rec.customs == 0
    assert manager.block_list()[1].id == "minecraft:slime_block"
    enabled = manager.enable_list()
    assert enabled[1] is True
    assert enabled[2] is True
    assert enabled[3] is False


def test_apply_preset_too_short(setup):
    manager, _ = setup
    with pytest.raises(ValueError):
        manager.apply_preset([0, 0])


def test_version_disables_new_blocks(setup):
    manager, _ = setup
    manager.set_version(12)
    manager.set_enabled(2, True)
    assert manager.enable_list()[2] is False
    assert manager.groups[2].is_all_over_version()


def test_version_out_of_range_ignored(setup):
    manager, _ = setup
    manager.set_version(11)
    manager.set_version(18)
    assert manager.mc_version == 17
    assert not manager.groups[2].is_all_over_version()


def test_bad_base_colour_rejected():
    manager = BlockListManager()
    with pytest.raises(ValueError):
        manager.add_blocks([info("x", 99)], ".")


def test_backslashes_in_image_dir(tmp_path):
    (tmp_path / "a.png").write_bytes(b"icon")
    manager = BlockListManager()
    manager.add_blocks([info("minecraft:stone", 11, icon="a.png")], str(tmp_path).replace("/", "\\"))
    entry = manager.groups[11].entries[0]
    assert entry.icon == Path(tmp_path) / "a.png"