import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from errors import ConfigurationError
from main import MachineContext, MachineSettings, load_config, main


HELLO_KEY = {"rotors": ["I", "II", "V"], "reflector": "B", "plugs": ["QE", "GN"]}


class MachineSettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = MachineSettings(rotors=["i", "ii", "iii"])

        self.assertEqual(settings.rotors, ["I", "II", "III"])
        self.assertEqual(settings.reflector, "B")
        self.assertEqual(settings.ring_settings, "AAA")
        self.assertEqual(settings.positions, "AAA")
        self.assertEqual(settings.plugs, [])

    def test_build_orders_rotors_right_to_left(self):
        machine = MachineSettings(rotors=["I", "II", "III"], positions="ABC").build()

        self.assertEqual(machine.windows(), "ABC")
        # rotor III stepped twice: contact A now meets the wire from C
        self.assertEqual(machine.right.wires["A"], "F")

    def test_build_encodes_known_message(self):
        machine = MachineSettings.from_dict(HELLO_KEY).build()
        self.assertEqual(machine.encode_sequence("HELLO"), "DJNPI")

    def test_from_dict_accepts_strings(self):
        settings = MachineSettings.from_dict(
            {"rotors": "I II V", "reflector": "b", "plugs": "QE GN",
             "ring_settings": ["a", "b", "c"], "positions": "xyz"}
        )

        self.assertEqual(settings.rotors, ["I", "II", "V"])
        self.assertEqual(settings.plugs, ["QE", "GN"])
        self.assertEqual(settings.ring_settings, "ABC")
        self.assertEqual(settings.positions, "XYZ")
        self.assertEqual(settings.reflector, "B")

    def test_round_trip_through_dict(self):
        settings = MachineSettings(["III", "I", "IV"], "C", "BCD", "XYZ", ["AB"])
        self.assertEqual(MachineSettings.from_dict(settings.to_dict()), settings)

    def test_invalid_settings_raise(self):
        with self.assertRaises(ConfigurationError):
            MachineSettings(rotors=["I", "II"])
        with self.assertRaises(ConfigurationError):
            MachineSettings(rotors=["I", "I", "II"])
        with self.assertRaises(ConfigurationError):
            MachineSettings(rotors=["I", "II", "III"], positions="AB")
        with self.assertRaises(ConfigurationError):
            MachineSettings.from_dict({"rotors": ["I", "II", "III"]})
        with self.assertRaises(ConfigurationError):
            MachineSettings(rotors=["I", "II", "III"], positions="A1A").build()


class ConfigFileTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = Path(self.tmp.name) / "key.json"

    def test_load_config(self):
        self.path.write_text(json.dumps(HELLO_KEY), encoding="utf-8")
        settings = load_config(self.path)

        self.assertEqual(settings.rotors, ["I", "II", "V"])
        self.assertEqual(settings.plugs, ["QE", "GN"])

    def test_missing_keys_raise(self):
        self.path.write_text(json.dumps({"rotors": ["I", "II", "V"]}), encoding="utf-8")
        with self.assertRaisesRegex(ConfigurationError, "reflector"):
            load_config(self.path)

    def test_bad_json_raises(self):
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(self.path)
        self.path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(self.path)

    def test_cli_one_shot(self):
        self.path.write_text(json.dumps(HELLO_KEY), encoding="utf-8")
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--config", str(self.path), "-m", "Hello!"])
        self.assertEqual(out.getvalue().strip(), "DJNPI")

    def test_cli_flags_override_config(self):
        self.path.write_text(json.dumps({"rotors": ["III", "IV", "V"], "reflector": "C"}), encoding="utf-8")
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--config", str(self.path), "--rotors", "I", "II", "V",
                  "--reflector", "B", "--plugs", "QE", "GN", "-m", "DJNPI"])
        self.assertEqual(out.getvalue().strip(), "HELLO")

    def test_cli_groups_output(self):
        self.path.write_text(json.dumps({"rotors": ["I", "II", "III"], "reflector": "B"}), encoding="utf-8")
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--config", str(self.path), "--block", "2", "-m", "aaaaa"])
        self.assertEqual(out.getvalue().strip(), "BD ZG O")

    def test_cli_reports_bad_config(self):
        with self.assertRaises(SystemExit):
            main(["--config", str(self.path), "-m", "A"])

    def test_wrong_typed_fields_raise_configuration_error(self):
        bad_fields = (
            {"ring_settings": None},
            {"positions": 7},
            {"plugs": ["QE", 5]},
            {"rotors": ["I", None, "III"]},
            {"reflector": None},
        )
        for extra in bad_fields:
            self.path.write_text(json.dumps({**HELLO_KEY, **extra}), encoding="utf-8")
            with self.subTest(extra=extra), self.assertRaises(ConfigurationError):
                load_config(self.path)

    def test_cli_reports_null_ring_settings(self):
        self.path.write_text(json.dumps({**HELLO_KEY, "ring_settings": None}), encoding="utf-8")
        with self.assertRaisesRegex(SystemExit, "Failed to load configuration"):
            main(["--config", str(self.path), "-m", "A"])

    def test_null_plugs_mean_no_plugs(self):
        self.path.write_text(json.dumps({**HELLO_KEY, "plugs": None}), encoding="utf-8")
        self.assertEqual(load_config(self.path).plugs, [])


class MachineContextTests(unittest.TestCase):
    def test_rewind_makes_every_block_start_fresh(self):
        ctx = MachineContext(MachineSettings.from_dict(HELLO_KEY))

        cipher = ctx.encipher_block("HELLO")
        self.assertEqual(cipher, "DJNPI")
        self.assertEqual(ctx.encipher_block(cipher), "HELLO")
        self.assertEqual(ctx.machine.windows(), "AAF")


if __name__ == "__main__":
    unittest.main()
