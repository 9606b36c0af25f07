"""Ingestion of dated daily-note files into typed record sequences."""
