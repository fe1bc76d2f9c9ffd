"""Tests for the command line entry point."""

import json
from unittest.mock import patch

from banker_app.__main__ import main


class TestMain:

    def test_missing_credentials_exit_nonzero(self, tmp_path, sample_options) -> None:
        del sample_options["akahu_user_token"]
        options_file = tmp_path / "options.json"
        options_file.write_text(json.dumps(sample_options))

        with patch("banker_app.__main__.AutoBankerEngine") as mock_engine:
            assert main([str(options_file)]) == 1

        mock_engine.assert_not_called()

    def test_bad_token_prefix_exit_nonzero(self, tmp_path, sample_options) -> None:
        sample_options["akahu_user_token"] = "token_without_prefix"
        options_file = tmp_path / "options.json"
        options_file.write_text(json.dumps(sample_options))

        with patch("banker_app.__main__.AutoBankerEngine") as mock_engine:
            assert main([str(options_file)]) == 1

        mock_engine.assert_not_called()

    def test_missing_file_exit_nonzero(self, tmp_path) -> None:
        assert main([str(tmp_path / "nope.json")]) == 1

    def test_valid_options_run_engine(self, tmp_path, sample_options) -> None:
        sample_options["notifier"] = "stdout"
        options_file = tmp_path / "options.json"
        options_file.write_text(json.dumps(sample_options))

        with patch("banker_app.__main__.AutoBankerEngine") as mock_engine:
            assert main([str(options_file)]) == 0

        config = mock_engine.call_args.args[0]
        assert config.account_to == "acc_everyday"
        mock_engine.return_value.run.assert_called_once_with()
