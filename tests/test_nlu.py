import unittest

from lambdas.owlbot import nlu


class TestNLUHelpers(unittest.TestCase):
    def test_normalize(self):
        self.assertEqual(nlu.normalize("  M.D.   Anderson\tHALL "), "m.d. anderson hall")
        self.assertEqual(nlu.normalize(None), "")
        self.assertEqual(nlu.normalize("Willy\u2019s \u201cPub\u201d"), "willy's \"pub\"")

    def test_navigation_synonyms(self):
        for text in ["menu", "Back", "go back", "EXIT", "quit", "escape", "  Menu!  "]:
            self.assertEqual(nlu.match_command(text), nlu.CMD_MENU, f"Expected menu: {text}")

    def test_mode_entry_synonyms(self):
        expected = {
            "directions": nlu.CMD_DIRECTIONS,
            "Businesses": nlu.CMD_BUSINESSES,
            "business": nlu.CMD_BUSINESSES,
            "servery": nlu.CMD_BUSINESSES,
            "serveries": nlu.CMD_BUSINESSES,
            "explore": nlu.CMD_EXPLORE,
            "Fun Facts": nlu.CMD_FUN_FACTS,
            "about": nlu.CMD_ABOUT,
            "help": nlu.CMD_HELP,
            "?": nlu.CMD_HELP,
            "feedback": nlu.CMD_FEEDBACK,
            "Sammy the Owl": nlu.CMD_EASTER_EGG,
        }
        for text, cmd in expected.items():
            self.assertEqual(nlu.match_command(text), cmd, f"Expected {cmd}: {text}")

    def test_commands_match_whole_input_only(self):
        for text in ["where is the menu", "north servery", "directions to baker", "", None, "!!!"]:
            self.assertIsNone(nlu.match_command(text), f"Expected no command: {text}")


if __name__ == "__main__":
    unittest.main()
