# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Statistics, trends and charts computed from classified warnings."""

from __future__ import annotations

from .charts import ChartConfig, render_chart
from .details import DocStatistics, PerformanceStatistics, SafetyStatistics, StyleStatistics
from .statistics import StatisticsMismatchError, WarningStatistics
from .trends import TrendAnalysis, analyze_trends

__all__ = [
    "ChartConfig",
    "DocStatistics",
    "PerformanceStatistics",
    "SafetyStatistics",
    "StatisticsMismatchError",
    "StyleStatistics",
    "TrendAnalysis",
    "WarningStatistics",
    "analyze_trends",
    "render_chart",
]
