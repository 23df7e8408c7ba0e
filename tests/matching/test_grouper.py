from vortex_modlist.matching.grouper import (
    detect_part_number,
    infer_base_name,
    merge_part_groups,
)
from vortex_modlist.models.records import AggregateModRecord

PAGE = "https://www.nexusmods.com/skyrimspecialedition/mods/1000"


class TestDetectPartNumber:
    def test_from_logical_name(self, make_record):
        assert detect_part_number(make_record(logical_file_name="Foo - Part 2")) == 2

    def test_falls_through_to_mod_key(self, make_record):
        record = make_record(mod_page_name="Foo", mod_key="Foo Part 4-1000-1-0-1700000000")
        assert detect_part_number(record) == 4

    def test_first_matching_field_wins(self, make_record):
        record = make_record(logical_file_name="Foo (Part 1)", archive_name="Foo Part 9.zip")
        assert detect_part_number(record) == 1

    def test_none(self, make_record):
        assert detect_part_number(make_record(logical_file_name="Foo")) is None


class TestInferBaseName:
    def test_prefers_page_name_prefix(self, make_record):
        group = [
            make_record(logical_file_name="Textures Part 1", mod_page_name="HD Pack - Part 1"),
            make_record(logical_file_name="Textures Part 2", mod_page_name="HD Pack - Part 2"),
        ]
        assert infer_base_name(group) == "HD Pack"

    def test_short_prefix_rejected(self, make_record):
        group = [
            make_record(logical_file_name="AB Part 1", mod_page_name="Big Landscapes"),
            make_record(logical_file_name="AB Part 2", mod_page_name="Big Landscapes"),
        ]
        assert infer_base_name(group) == "Big Landscapes"

    def test_longest_fallback(self, make_record):
        group = [
            make_record(logical_file_name="Part 1"),
            make_record(logical_file_name="Part 2", archive_name="Landscape Overhaul.7z"),
        ]
        assert infer_base_name(group) == "Landscape Overhaul.7z"


class TestMergePartGroups:
    def test_three_parts_merge(self, make_record):
        records = [
            make_record(logical_file_name="Foo Bar - Part 1", homepage=PAGE, deploy_index=4),
            make_record(logical_file_name="Foo Bar - Part 2", homepage=PAGE, deploy_index=2),
            make_record(logical_file_name="Foo Bar - Part 3", homepage=PAGE, deploy_index=7),
        ]
        merged = merge_part_groups(records)
        assert len(merged) == 1
        agg = merged[0]
        assert isinstance(agg, AggregateModRecord)
        assert agg.display_name == "Foo Bar"
        assert agg.base_name == "Foo Bar"
        assert agg.deploy_index == 2
        assert agg.part_numbers == [1, 2, 3]
        assert agg.part_count == 3
        assert [m.deploy_index for m in agg.members] == [2, 4, 7]

    def test_single_part_member_not_merged(self, make_record):
        records = [
            make_record(logical_file_name="Foo Bar - Part 1", homepage=PAGE),
            make_record(logical_file_name="Foo Bar Patch", homepage=PAGE),
            make_record(logical_file_name="Foo Bar Extras", homepage=PAGE),
        ]
        assert merge_part_groups(records) == records

    def test_different_pages_not_merged(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE.replace("1000", "2000")),
        ]
        assert merge_part_groups(records) == records

    def test_missing_homepage_not_grouped(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1"),
            make_record(logical_file_name="Foo - Part 2"),
        ]
        assert merge_part_groups(records) == records

    def test_different_games_not_merged(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE, game="skyrimse"),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE, game="skyrim"),
        ]
        assert len(merge_part_groups(records)) == 2

    def test_trailing_slash_shares_page(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE + "/"),
        ]
        assert len(merge_part_groups(records)) == 1

    def test_enabled_is_any(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE, enabled=False),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE, enabled=True),
        ]
        assert merge_part_groups(records)[0].enabled is True

    def test_archive_size_is_total(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE, archive_size=100),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE, archive_size=250),
            make_record(logical_file_name="Foo - Part 3", homepage=PAGE),
        ]
        assert merge_part_groups(records)[0].archive_size == 350

    def test_latest_file_time(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE, archive_file_time=2000),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE, archive_file_time=1000),
        ]
        assert merge_part_groups(records)[0].archive_file_time == 2000

    def test_global_version_preferred(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE, file_version="1.0"),
            make_record(
                logical_file_name="Foo - Part 2",
                homepage=PAGE,
                file_version="1.0",
                global_version="2.5",
            ),
        ]
        assert merge_part_groups(records)[0].display_version == "2.5"

    def test_most_common_file_version(self, make_record):
        records = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE, file_version="1.1"),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE, file_version="1.2"),
            make_record(logical_file_name="Foo - Part 3", homepage=PAGE, file_version="1.2"),
        ]
        assert merge_part_groups(records)[0].display_version == "1.2"

    def test_unrelated_records_keep_position(self, make_record):
        before = make_record(logical_file_name="Alpha")
        parts = [
            make_record(logical_file_name="Foo - Part 1", homepage=PAGE),
            make_record(logical_file_name="Foo - Part 2", homepage=PAGE),
        ]
        after = make_record(logical_file_name="Omega", homepage=PAGE.replace("1000", "3000"))
        merged = merge_part_groups([before, *parts, after])
        assert merged[0] is before
        assert isinstance(merged[1], AggregateModRecord)
        assert merged[2] is after
