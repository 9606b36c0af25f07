"""
Command to analyze a folder of daily notes.

Usage:
    analyze-notes /path/to/DailyNotes --start 2025-07-07 --end 2025-07-13
    analyze-notes --export results.csv        # folder and dates from NOTES_* env vars
"""

import argparse
import logging
import sys

import pandas as pd

from notes_core.config import AnalysisConfig
from notes_core.exceptions import NotesAnalyzerError
from notes_core.services import InsightsService
from .adapters.data_processor import DataProcessor
from .services import AnalysisService, AnalysisResult


class Command:
    help = 'Extract front matter from dated daily notes and summarize sleep and metrics'

    def __init__(self, stdout=None, stderr=None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog='analyze-notes', description=self.help)
        self.add_arguments(parser)
        return parser

    def add_arguments(self, parser):
        parser.add_argument(
            'folder',
            nargs='?',
            help='Path to the daily notes folder (default: $NOTES_FOLDER)'
        )
        parser.add_argument(
            '--start',
            help='First day of the analysis period, yyyy-mm-dd (default: $NOTES_START_DATE)'
        )
        parser.add_argument(
            '--end',
            help='Last day of the analysis period, yyyy-mm-dd (default: $NOTES_END_DATE)'
        )
        parser.add_argument(
            '--export',
            metavar='PATH',
            help='Also write the record table to a CSV file'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Log every skipped file and ignored value'
        )

    def write(self, line: str = ''):
        self.stdout.write(line + '\n')

    def run(self, argv=None) -> int:
        options = self.create_parser().parse_args(argv)

        logging.basicConfig(
            level=logging.DEBUG if options.verbose else logging.INFO,
            format='%(levelname)s %(name)s: %(message)s'
        )

        try:
            config = AnalysisConfig.from_env(
                folder=options.folder, start=options.start, end=options.end
            )
            result = AnalysisService().run(config)
        except NotesAnalyzerError as e:
            self.stderr.write(f"Error: {e}\n")
            return 1

        self.handle(result)

        if options.export:
            DataProcessor.records_to_dataframe(result.records).to_csv(options.export, index=False)
            self.write(f"Record table saved to: {options.export}")
        return 0

    def handle(self, result: AnalysisResult):
        config = result.config
        self.write(f"Notes folder: {config.folder}")
        self.write(f"Period: {config.start_date} to {config.end_date}")
        self.write("-" * 50)

        table = DataProcessor.records_to_dataframe(result.primary)
        with pd.option_context('display.width', 120, 'display.max_columns', None):
            self.write(table.to_string(index=False))

        self._write_sleep(result)
        self._write_averages(result)

    def _write_sleep(self, result: AnalysisResult):
        self.write("\nSleep cycles (sleep-in -> next day's wake-up):")
        if not result.has_sleep_data:
            self.write("  Insufficient data: at least 2 consecutive days are required.")
            return

        for cycle in result.sleep_cycles:
            span = f"{cycle.sleep_date} -> {cycle.wake_date}"
            if cycle.is_plottable:
                self.write(
                    f"  {span}: {cycle.sleep_label} - {cycle.wake_label} ({cycle.duration:.1f}h)"
                )
            else:
                self.write(f"  {span}: incomplete")

    def _write_averages(self, result: AnalysisResult):
        self.write("\nAverages (days with a logged value):")
        for name, value in InsightsService.averages(result.primary).items():
            shown = 'no data' if value is None else f"{value:.1f}"
            self.write(f"  {name}: {shown}")


def main(argv=None) -> int:
    return Command().run(argv)


if __name__ == '__main__':
    sys.exit(main())
