#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the service entry point.
"""

import logging
import unittest
from unittest.mock import MagicMock, patch

from lead_webhook_sync import main as main_module


@patch("lead_webhook_sync.main.configure_logging", return_value=MagicMock(spec=logging.Logger))
class TestMain(unittest.TestCase):
    """Tests for main()."""

    @patch.dict("os.environ", {"HUBSPOT_ACCESS_TOKEN": "t", "PORT": "3000"})
    @patch("lead_webhook_sync.main.uvicorn.run")
    @patch("lead_webhook_sync.main.create_app")
    def test_starts_server(self, mock_create_app, mock_run, mock_logging):
        exit_code = main_module.main(["--port", "8081", "--host", "127.0.0.1", "--log-level", "DEBUG"])

        self.assertEqual(exit_code, 0)
        config = mock_create_app.call_args.args[0]
        self.assertEqual(config.port, 8081)
        self.assertEqual(config.log_level, logging.DEBUG)
        mock_run.assert_called_once_with(
            mock_create_app.return_value, host="127.0.0.1", port=8081, log_level="debug"
        )

    @patch.dict("os.environ", {"HUBSPOT_ACCESS_TOKEN": "", "HUBSPOT_API_KEY": ""})
    @patch("lead_webhook_sync.main.uvicorn.run")
    @patch("lead_webhook_sync.main.create_app")
    def test_missing_token_exits(self, mock_create_app, mock_run, mock_logging):
        self.assertEqual(main_module.main([]), 1)

        mock_create_app.assert_not_called()
        mock_run.assert_not_called()
        mock_logging.return_value.error.assert_called_once()
