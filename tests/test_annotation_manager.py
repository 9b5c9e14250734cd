"""
Tests for AnnotationManager: editing, hit-testing, history and saving.
"""
from waypoint.core.annotations import Annotation, AnnotationManager, AnnotationType
from tests.helpers import make_annotation


class TestEditing:

    def test_add_and_count(self, manager):
        manager.add_annotation(make_annotation(1, 10, 10))
        manager.add_annotation(make_annotation(2, 10, 10))
        assert manager.get_annotation_count() == 2

    def test_remove_matches_by_id(self, manager):
        manager.add_annotation(make_annotation(1, 10, 10, "a"))
        stale_copy = make_annotation(3, 500, 500, "a")

        assert manager.remove_annotation(stale_copy) is True
        assert manager.annotations == []

    def test_remove_unknown(self, manager):
        assert manager.remove_annotation(make_annotation(1, 0, 0, "ghost")) is False
        assert manager.can_undo() is False

    def test_remove_many_is_one_undo_step(self, manager):
        records = [make_annotation(1, y, 10) for y in (10, 50, 90)]
        for record in records:
            manager.add_annotation(record)

        assert manager.remove_annotations(records[:2]) == 2
        manager.undo()
        assert manager.get_annotation_count() == 3

    def test_remove_clears_selection_of_removed(self, manager):
        record = make_annotation(1, 10, 10)
        manager.add_annotation(record)
        manager.select(record)

        manager.remove_annotation(record)

        assert manager.get_selected_annotations() == []


class TestQueries:

    def test_annotations_for_page(self, manager):
        on_first = make_annotation(1, 10, 10)
        manager.add_annotation(on_first)
        manager.add_annotation(make_annotation(2, 10, 10))

        assert manager.get_annotations_for_page(0) == [on_first]

    def test_annotations_of_type(self, manager):
        mark = make_annotation(1, 10, 10, annotation_type=AnnotationType.REDACTION)
        manager.add_annotation(make_annotation(1, 50, 10))
        manager.add_annotation(mark)

        assert manager.get_annotations_of_type(AnnotationType.REDACTION) == [mark]

    def test_hit_test_prefers_topmost(self, manager):
        below = Annotation(0, AnnotationType.RECTANGLE, (0, 0, 100, 100))
        above = Annotation(0, AnnotationType.RECTANGLE, (50, 50, 150, 150))
        manager.add_annotation(below)
        manager.add_annotation(above)

        assert manager.get_annotation_at_point(0, 75, 75) is above
        assert manager.get_annotation_at_point(0, 25, 25) is below

    def test_hit_test_scales_with_zoom(self, manager):
        record = Annotation(0, AnnotationType.RECTANGLE, (100, 100, 200, 200))
        manager.add_annotation(record)

        assert manager.get_annotation_at_point(0, 300, 300, zoom=2.0) is record
        assert manager.get_annotation_at_point(0, 300, 300, zoom=1.0) is None

    def test_hit_test_allows_tolerance(self, manager):
        record = Annotation(0, AnnotationType.RECTANGLE, (100, 100, 200, 200))
        manager.add_annotation(record)

        assert manager.get_annotation_at_point(0, 96, 150) is record
        assert manager.get_annotation_at_point(0, 90, 150) is None

    def test_select_returns_live_record(self, manager):
        live = make_annotation(1, 10, 10, "a")
        manager.add_annotation(live)

        assert manager.select(make_annotation(1, 10, 10, "a")) is live
        assert manager.select(make_annotation(1, 10, 10, "nope")) is None

    def test_deselect_reports_previous_state(self, manager):
        record = make_annotation(1, 10, 10)
        manager.add_annotation(record)
        manager.select(record)

        assert manager.deselect() is True
        assert manager.deselect() is False


class TestHistory:

    def test_undo_redo_keeps_ids(self, manager):
        record = make_annotation(1, 10, 10, "a")
        manager.add_annotation(record)
        manager.remove_annotation(record)

        assert manager.undo() is True
        assert [a.id for a in manager.annotations] == ["a"]
        assert manager.redo() is True
        assert manager.annotations == []

    def test_new_change_clears_redo(self, manager):
        manager.add_annotation(make_annotation(1, 10, 10))
        manager.undo()
        manager.add_annotation(make_annotation(1, 50, 10))

        assert manager.can_redo() is False

    def test_undo_limit(self, persistence):
        manager = AnnotationManager(persistence, autosave=False, undo_limit=2)
        manager.set_pdf_path("/docs/sample.pdf")
        for y in (10, 20, 30):
            manager.add_annotation(make_annotation(1, y, 10))

        assert manager.undo() and manager.undo()
        assert manager.undo() is False
        assert manager.get_annotation_count() == 1

    def test_clear_all(self, manager):
        manager.add_annotation(make_annotation(1, 10, 10))
        manager.clear_all()

        assert manager.annotations == []
        assert manager.pdf_path is None
        assert manager.can_undo() is False
        assert manager.has_unsaved_changes is False


class TestSaving:

    def test_changes_are_tracked(self, manager):
        record = make_annotation(1, 10, 10)
        manager.add_annotation(record)
        assert manager.has_unsaved_changes is True

        manager.remove_annotation(record)
        assert manager.has_unsaved_changes is False

    def test_save_clears_unsaved_flag(self, manager, persistence):
        manager.add_annotation(make_annotation(1, 10, 10))

        assert manager.save_to_json() is True
        assert manager.has_unsaved_changes is False
        assert persistence.has_saved_annotations("/docs/sample.pdf")

    def test_save_without_pdf(self, persistence):
        manager = AnnotationManager(persistence, autosave=False)
        assert manager.save_to_json() is False

    def test_autosave_writes_on_each_change(self, persistence):
        manager = AnnotationManager(persistence, autosave=True)
        manager.set_pdf_path("/docs/sample.pdf")

        manager.add_annotation(make_annotation(1, 10, 10, "a"))

        assert manager.has_unsaved_changes is False
        stored = persistence.load_from_json("/docs/sample.pdf")
        assert [a.id for a in stored] == ["a"]

    def test_autosave_failure_keeps_unsaved_flag(self, tmp_path):
        from waypoint.core.annotations import AnnotationPersistence

        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        manager = AnnotationManager(AnnotationPersistence(blocker / "sub"), autosave=True)
        manager.set_pdf_path("/docs/sample.pdf")

        manager.add_annotation(make_annotation(1, 10, 10))

        assert manager.has_unsaved_changes is True

    def test_load_replaces_collection_and_history(self, manager):
        manager.add_annotation(make_annotation(1, 10, 10, "saved"))
        manager.save_to_json()
        manager.add_annotation(make_annotation(1, 50, 10, "unsaved"))

        assert manager.load_from_json() is True
        assert [a.id for a in manager.annotations] == ["saved"]
        assert manager.can_undo() is False

    def test_load_malformed_file_fails(self, manager, persistence):
        path = persistence.get_json_path("/docs/sample.pdf")
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        assert manager.load_from_json() is False

    def test_auto_load_without_saved_file(self, manager):
        assert manager.auto_load_annotations() is False
