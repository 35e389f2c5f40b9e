from __future__ import annotations

import itertools
import unittest

import numpy as np

from pictor_core.canvas import RecordingCanvas, transform_points
from pictor_core.geometry import Offset, Rect, Size
from pictor_core.painter import LTR, RTL, PaintConfig, PaintConfigError, paint
from pictor_core.picture import Picture, PictureInfo, PictureRecorder


def _picture(view_box: Rect) -> PictureInfo:
    recorder = PictureRecorder()
    recorder.fill_rect(view_box, (255, 0, 0, 255))
    return PictureInfo(picture=recorder.end_recording(), view_box=view_box)


class _ExplodingCanvas(RecordingCanvas):
    def draw_picture(self, picture: object) -> None:
        super().draw_picture(picture)
        raise RuntimeError("draw failed")


class PaintNoOpTests(unittest.TestCase):
    def test_missing_picture_issues_no_canvas_ops(self) -> None:
        canvas = RecordingCanvas()
        paint(canvas, Offset.zero(), Size(100.0, 100.0), None, PaintConfig())
        self.assertEqual(canvas.ops, [])

    def test_missing_or_empty_size_issues_no_canvas_ops(self) -> None:
        picture = _picture(Rect(0.0, 0.0, 10.0, 10.0))
        for size in (None, Size.zero(), Size(0.0, 20.0), Size(20.0, 0.0)):
            with self.subTest(size=size):
                canvas = RecordingCanvas()
                paint(canvas, Offset.zero(), size, picture, PaintConfig())
                self.assertEqual(canvas.ops, [])

    def test_degenerate_view_box_is_skipped(self) -> None:
        canvas = RecordingCanvas()
        picture = PictureInfo(picture=Picture(), view_box=Rect(0.0, 0.0, 0.0, 10.0))
        paint(canvas, Offset.zero(), Size(10.0, 10.0), picture, PaintConfig())
        self.assertEqual(canvas.ops, [])

    def test_skip_reason_is_logged_at_debug(self) -> None:
        with self.assertLogs("pictor_core.painter", level="DEBUG") as logs:
            paint(RecordingCanvas(), Offset.zero(), Size(1.0, 1.0), None, PaintConfig())
        self.assertIn("no picture", logs.output[0])


class PaintSequenceTests(unittest.TestCase):
    def test_default_config_sequence(self) -> None:
        view_box = Rect(0.0, 0.0, 50.0, 50.0)
        picture = _picture(view_box)
        canvas = RecordingCanvas()
        paint(canvas, Offset(10.0, 20.0), Size(100.0, 100.0), picture, PaintConfig())
        self.assertEqual(
            canvas.op_names(),
            ["save", "translate", "scale", "clip_rect", "draw_picture", "restore"],
        )
        self.assertEqual(canvas.ops[1].args, (10.0, 20.0))
        self.assertEqual(canvas.ops[2].args, (2.0, 2.0))
        self.assertEqual(canvas.ops[3].args, (view_box,))
        self.assertIs(canvas.ops[4].args[0], picture.picture)

    def test_rtl_sequence_mirrors_before_viewport_transform(self) -> None:
        canvas = RecordingCanvas()
        config = PaintConfig(match_text_direction=True, text_direction=RTL)
        paint(canvas, Offset.zero(), Size(100.0, 100.0), _picture(Rect(0.0, 0.0, 50.0, 50.0)), config)
        self.assertEqual(
            canvas.op_names(),
            ["save", "translate", "translate", "scale", "translate", "scale", "clip_rect", "draw_picture", "restore"],
        )
        self.assertEqual(canvas.ops[3].args, (-1.0, 1.0))

    def test_identical_inputs_give_identical_sequences(self) -> None:
        picture = _picture(Rect(0.0, 0.0, 40.0, 50.0))
        config = PaintConfig(match_text_direction=True, text_direction=RTL)
        first = RecordingCanvas()
        second = RecordingCanvas()
        paint(first, Offset(3.0, 4.0), Size(200.0, 100.0), picture, config)
        paint(second, Offset(3.0, 4.0), Size(200.0, 100.0), picture, config)
        self.assertEqual(first.ops, second.ops)


class PaintSaveRestoreTests(unittest.TestCase):
    def test_saves_match_restores_for_all_input_combinations(self) -> None:
        pictures = [None, _picture(Rect(0.0, 0.0, 40.0, 50.0)), PictureInfo(Picture(), Rect(0.0, 0.0, 0.0, 0.0))]
        sizes = [None, Size.zero(), Size(120.0, 80.0)]
        configs = [
            PaintConfig(),
            PaintConfig(match_text_direction=True, text_direction=RTL),
            PaintConfig(match_text_direction=True, text_direction=LTR, allow_drawing_outside_view_box=True),
            PaintConfig(text_direction=RTL, allow_drawing_outside_view_box=True),
        ]
        for picture, size, config in itertools.product(pictures, sizes, configs):
            with self.subTest(picture=picture, size=size, config=config):
                canvas = RecordingCanvas()
                paint(canvas, Offset(1.0, 2.0), size, picture, config)
                self.assertEqual(canvas.save_count, canvas.restore_count)
                self.assertEqual(canvas.depth, 0)

    def test_restore_runs_when_draw_raises(self) -> None:
        canvas = _ExplodingCanvas()
        with self.assertRaises(RuntimeError):
            paint(canvas, Offset.zero(), Size(10.0, 10.0), _picture(Rect(0.0, 0.0, 10.0, 10.0)), PaintConfig())
        self.assertEqual(canvas.save_count, 1)
        self.assertEqual(canvas.restore_count, 1)
        self.assertTrue(np.array_equal(canvas.matrix, np.identity(3)))


class PaintMirrorTests(unittest.TestCase):
    def _drawn_matrix(self, config: PaintConfig, offset: Offset = Offset.zero()) -> np.ndarray:
        canvas = RecordingCanvas()
        paint(canvas, offset, Size(100.0, 100.0), _picture(Rect(0.0, 0.0, 100.0, 100.0)), config)
        self.assertEqual(len(canvas.pictures_drawn), 1)
        return canvas.pictures_drawn[0][1]

    def test_rtl_reflects_about_vertical_center(self) -> None:
        matrix = self._drawn_matrix(PaintConfig(match_text_direction=True, text_direction=RTL))
        mapped = transform_points(matrix, np.array([[0.0, 0.0], [100.0, 0.0], [50.0, 30.0]]))
        self.assertEqual(mapped.tolist(), [[100.0, 0.0], [0.0, 0.0], [50.0, 30.0]])

    def test_rtl_reflection_respects_offset(self) -> None:
        matrix = self._drawn_matrix(PaintConfig(match_text_direction=True, text_direction=RTL), Offset(10.0, 5.0))
        mapped = transform_points(matrix, np.array([[0.0, 0.0], [100.0, 0.0]]))
        self.assertEqual(mapped.tolist(), [[110.0, 5.0], [10.0, 5.0]])

    def test_no_mirror_without_match_or_for_ltr(self) -> None:
        for config in (
            PaintConfig(text_direction=RTL),
            PaintConfig(match_text_direction=True, text_direction=LTR),
        ):
            with self.subTest(config=config):
                matrix = self._drawn_matrix(config)
                mapped = transform_points(matrix, np.array([[0.0, 0.0], [100.0, 0.0]]))
                self.assertEqual(mapped.tolist(), [[0.0, 0.0], [100.0, 0.0]])

    def test_match_without_direction_fails_before_canvas_use(self) -> None:
        canvas = RecordingCanvas()
        config = PaintConfig(match_text_direction=True)
        with self.assertRaises(PaintConfigError):
            paint(canvas, Offset.zero(), Size(10.0, 10.0), _picture(Rect(0.0, 0.0, 10.0, 10.0)), config)
        self.assertEqual(canvas.ops, [])


class PaintClipTests(unittest.TestCase):
    def test_clip_matches_transformed_view_box(self) -> None:
        canvas = RecordingCanvas()
        paint(canvas, Offset.zero(), Size(200.0, 100.0), _picture(Rect(0.0, 0.0, 40.0, 50.0)), PaintConfig())
        _, _, clip = canvas.pictures_drawn[0]
        self.assertEqual(clip, Rect.from_ltrb(10.0, 0.0, 90.0, 100.0))

    def test_overflow_allowed_issues_no_clip(self) -> None:
        canvas = RecordingCanvas()
        config = PaintConfig(allow_drawing_outside_view_box=True)
        paint(canvas, Offset.zero(), Size(200.0, 100.0), _picture(Rect(0.0, 0.0, 40.0, 50.0)), config)
        self.assertNotIn("clip_rect", canvas.op_names())
        self.assertIsNone(canvas.pictures_drawn[0][2])


class PaintConfigTests(unittest.TestCase):
    def test_flip_horizontally(self) -> None:
        self.assertTrue(PaintConfig(match_text_direction=True, text_direction=RTL).flip_horizontally)
        self.assertFalse(PaintConfig(match_text_direction=True, text_direction=LTR).flip_horizontally)
        self.assertFalse(PaintConfig(text_direction=RTL).flip_horizontally)

    def test_configs_compare_by_value(self) -> None:
        self.assertEqual(PaintConfig(text_direction=RTL), PaintConfig(text_direction=RTL))
        self.assertNotEqual(PaintConfig(), PaintConfig(allow_drawing_outside_view_box=True))

    def test_from_mapping_normalizes_direction(self) -> None:
        config = PaintConfig.from_mapping({"match_text_direction": True, "text_direction": " RTL "})
        self.assertEqual(config, PaintConfig(match_text_direction=True, text_direction=RTL))
        self.assertEqual(PaintConfig.from_mapping({}), PaintConfig())

    def test_from_mapping_rejects_bad_values(self) -> None:
        bad = [
            {"match_text_direction": True},
            {"match_text_direction": "yes"},
            {"text_direction": "up"},
            {"mirror": True},
        ]
        for raw in bad:
            with self.subTest(raw=raw):
                with self.assertRaises(PaintConfigError):
                    PaintConfig.from_mapping(raw)


if __name__ == "__main__":
    unittest.main()
