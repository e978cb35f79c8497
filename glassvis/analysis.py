"""Reporting utilities for diff results.

- Exporting a result to JSON (image data excluded)
- Appending results to the CSV inspection log
"""
import csv
import json
import os
import time
from datetime import datetime
from pathlib import Path

import numpy as np

from .geometry import Point, Rect


LOG_HEADER = ['Timestamp', 'Reference', 'Captured', 'Significance',
              'DefectCount', 'DefectRate', 'SSIM', 'Time']


def _default_serializer(obj):
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, Rect):
        return {'x': obj.x, 'y': obj.y, 'w': obj.width, 'h': obj.height}
    elif isinstance(obj, Point):
        return [obj.x, obj.y]
    elif isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def result_summary(result: dict) -> dict:
    """JSON-friendly subset of a pipeline result."""
    summary = {
        'timestamp': datetime.now().isoformat(),
        'reference_path': result.get('reference_path'),
        'captured_path': result.get('captured_path'),
        'diff_path': result.get('diff_path'),
        'image_size': [result.get('width'), result.get('height')],
        'metrics': {
            'significance': result.get('significance'),
            'defect_count': result.get('count'),
            'defect_rate': result.get('defect_rate'),
            'ssim_score': result.get('ssim_score'),
            'processing_time': result.get('processing_time')
        },
        'bounding_box': result.get('bounding_box')
    }

    if 'error' in result:
        summary['error'] = result['error']

    return summary


def export_results_as_json(result: dict, output_path: str = None) -> str:
    """Export a diff result to a JSON file.

    Args:
        result: Result dict from the pipeline
        output_path: Optional output file path (auto-generates if None)

    Returns:
        Path to saved JSON file
    """
    if output_path is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = f"diff_result_{timestamp}.json"

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(result_summary(result), f, indent=2, default=_default_serializer)
    return output_path


def init_log_file(log_file: str) -> None:
    """Create the CSV log with its header if it does not exist yet."""
    if not os.path.exists(log_file):
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        with open(log_file, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(LOG_HEADER)


def log_result(log_file: str, result: dict) -> None:
    """Append one diff result to the CSV log."""
    init_log_file(log_file)
    with open(log_file, 'a', newline='') as f:
        writer = csv.writer(f)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        writer.writerow([timestamp,
                         os.path.basename(result.get('reference_path') or ''),
                         os.path.basename(result.get('captured_path') or ''),
                         result.get('significance'),
                         result.get('count'),
                         f"{result.get('defect_rate', 0.0):.4f}",
                         f"{result.get('ssim_score', 0.0):.4f}",
                         f"{result.get('processing_time', 0.0):.2f}"])


__all__ = ['LOG_HEADER', 'result_summary', 'export_results_as_json',
           'init_log_file', 'log_result']
