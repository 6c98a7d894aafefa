import os
from typing import Any, Dict, List

import pandas as pd

REPORT_COLUMNS = [
    "name",
    "algorithm",
    "flow_name",
    "flow_id",
    "n_components",
    "n_parameters",
    "parameter_names_match",
    "flow_text_match",
    "options_match",
    "success",
    "error_message",
]


class ReportManager:
    """Writes the CSV report of a round-trip run"""

    def __init__(self, report_path: str):
        """
        Initialize report manager.

        Args:
            report_path: Path to CSV report file
        """
        self.report_path = report_path
        self._ensure_report_directory()

    def _ensure_report_directory(self) -> None:
        """Ensure the directory for the report file exists"""
        report_dir = os.path.dirname(self.report_path)
        if report_dir and not os.path.exists(report_dir):
            os.makedirs(report_dir)

    def write(self, results: List[Dict[str, Any]]) -> pd.DataFrame:
        """
        Write results to the report file, replacing any previous report

        Returns:
            The written report
        """
        df = pd.DataFrame(results, columns=REPORT_COLUMNS)
        df.to_csv(self.report_path, index=False)
        return df

    def read(self) -> pd.DataFrame:
        """Read a previously written report"""
        if not os.path.exists(self.report_path):
            return pd.DataFrame(columns=REPORT_COLUMNS)
        return pd.read_csv(self.report_path)
