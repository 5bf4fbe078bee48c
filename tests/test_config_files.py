import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from cellbook.config import CodecOptions, ConfigError, load_options, options_from_mapping
from cellbook.decode import decode
from cellbook.encode import encode
from cellbook.files import read_notebook, write_notebook

DEMO = Path(__file__).resolve().parents[1] / "examples" / "demo.json"


class TestConfig(unittest.TestCase):
    def _load(self, text: str) -> CodecOptions:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "cellbook.yaml"
            p.write_text(text, encoding="utf-8")
            return load_options(p)

    def test_defaults(self):
        opts = CodecOptions()
        self.assertEqual(opts.default_kernel, "python3")
        self.assertFalse(opts.preserve_title)

    def test_load_yaml(self):
        opts = self._load("default_kernel: julia-1.9\npreserve_title: true\n")
        self.assertEqual(opts, CodecOptions(default_kernel="julia-1.9", preserve_title=True))

    def test_empty_file_gives_defaults(self):
        self.assertEqual(self._load(""), CodecOptions())

    def test_unknown_key_warns(self):
        with self.assertLogs("cellbook.config", level="WARNING") as logs:
            opts = options_from_mapping({"indent": 4, "preserve_title": True})
        self.assertTrue(opts.preserve_title)
        self.assertTrue(any("indent" in line for line in logs.output))

    def test_wrong_type_raises(self):
        with self.assertRaises(ConfigError):
            options_from_mapping({"preserve_title": "yes please"})

    def test_non_mapping_root_raises(self):
        with self.assertRaises(ConfigError):
            self._load("- a\n- b\n")

    def test_invalid_yaml_raises(self):
        with self.assertRaises(ConfigError):
            self._load("default_kernel: [unclosed\n")


class TestFiles(unittest.TestCase):
    def test_read_demo(self):
        nb = read_notebook(DEMO)
        self.assertEqual(nb.title, "# Demo Notebook")
        self.assertEqual(nb.authors, ["Ada", "Grace"])
        self.assertEqual([c.id for c in nb.cells], ["intro", "print-hello", "notes-caveats"])
        self.assertEqual(nb.cells[1].cell.outputs, ["hello\n"])

    def test_write_adds_trailing_newline(self):
        nb = read_notebook(DEMO)
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "out.json"
            with self.assertLogs("cellbook.files", level="INFO"):
                write_notebook(out, nb)
            text = out.read_text(encoding="utf-8")
        self.assertEqual(text, encode(nb) + "\n")
        self.assertEqual(json.loads(text)["cells"][2]["cell_id"], "notes-caveats")

    def test_write_lone_surrogate(self):
        nb = decode('{"cells":[{"cell":{"source":["x\\ud800y"]}}]}')
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "out.json"
            write_notebook(out, nb)
            data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(data["cells"][0]["cell"]["source"], ["x\ud800y"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
