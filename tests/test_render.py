import io
import json
import random
import unittest

from PIL import Image

from objdetect.services.render import (
    assign_colors, draw_overlay, format_score, render_detections, render_labels, results_json
)
from tests.utils import create_test_image, make_detection


class TestRender(unittest.TestCase):
    def test_assign_colors(self):
        colors = assign_colors(5, random.Random(1))
        self.assertEqual(len(colors), 5)
        for color in colors:
            self.assertRegex(color, r"^#[0-9A-F]{6}$")
        self.assertEqual(colors, assign_colors(5, random.Random(1)))
        self.assertEqual(assign_colors(0), [])

    def test_format_score(self):
        self.assertEqual(format_score(0.9753), "97.53%")
        self.assertEqual(format_score(1.0), "100.00%")
        self.assertEqual(format_score(0.123456), "12.35%")

    def test_render_index_aligned(self):
        detections = [make_detection("cat", 0.9), make_detection("dog", 0.5, 0, 0, 500, 250)]
        colors = ["#FF0000", "#00FF00"]
        rendered = render_detections(detections, colors, 1000, 500)

        self.assertEqual([r.index for r in rendered], [0, 1])
        self.assertEqual([r.label for r in rendered], ["cat", "dog"])
        self.assertEqual([r.color for r in rendered], colors)
        self.assertEqual(rendered[1].score_text, "50.00%")
        self.assertAlmostEqual(rendered[0].display_box.left, 10.0)
        self.assertAlmostEqual(rendered[1].display_box.width, 50.0)

    def test_render_labels(self):
        labels = render_labels([make_detection("cat", 0.9753), make_detection("dog", 0.5)], ["#FF0000", "#00FF00"])
        self.assertEqual([(e.index, e.label, e.score_text, e.color) for e in labels],
                         [(0, "cat", "97.53%", "#FF0000"), (1, "dog", "50.00%", "#00FF00")])

    def test_render_waits_for_dimensions(self):
        detections = [make_detection()]
        self.assertEqual(render_detections(detections, ["#FFFFFF"], 0, 0), [])

    def test_render_empty(self):
        self.assertEqual(render_detections([], [], 1000, 500), [])

    def test_results_json(self):
        dumped = json.loads(results_json([make_detection()]))
        self.assertEqual(dumped[0]["label"], "cat")
        self.assertEqual(dumped[0]["box"]["xmin"], 100)

    def test_draw_overlay(self):
        data = create_test_image(400, 200, color=(0, 0, 0))
        png = draw_overlay(data, [make_detection(xmin=10, ymin=60, xmax=100, ymax=150)], ["#FF0000"])

        image = Image.open(io.BytesIO(png))
        self.assertEqual(image.format, "PNG")
        self.assertEqual(image.size, (400, 200))
        # right edge of the rectangle, below the caption
        self.assertEqual(image.convert("RGB").getpixel((100, 140)), (255, 0, 0))


if __name__ == '__main__':
    unittest.main()
