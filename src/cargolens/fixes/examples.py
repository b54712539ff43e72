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

"""Before/after examples attached to selected warnings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from cargolens.core.model_types import CategoryType

from .suggestions import first_token

if TYPE_CHECKING:
    from cargolens.core.types import Warning  # noqa: A004


@dataclass(slots=True, frozen=True)
class FixExample:
    """Worked example showing code before and after a fix."""

    description: str
    before: str
    after: str
    explanation: str
    additional_notes: tuple[str, ...] = ()


_LOCKING_BEFORE: Final[str] = """
// ❌ Inefficient: Long-held locks
fn process_data(data: &Arc<Mutex<Vec<String>>>) {
    let mut locked = data.lock().unwrap();
    for item in locked.iter_mut() {
        expensive_operation(item);  // Lock held during expensive operation
    }
}"""

_LOCKING_AFTER: Final[str] = """
// ✅ Efficient: Minimize lock duration
fn process_data(data: &Arc<Mutex<Vec<String>>>) {
    // Option 1: Clone data under lock
    let items = {
        let locked = data.lock().unwrap();
        locked.clone()
    };
    for item in &items {
        expensive_operation(item);
    }

    // Option 2: Process items individually
    for i in 0..data.lock().unwrap().len() {
        let item = {
            let locked = data.lock().unwrap();
            locked[i].clone()
        };
        expensive_operation(&item);
    }
}"""

_DOCS_BEFORE: Final[str] = """
pub struct Configuration {
    timeout: Duration,
    retries: u32,
}"""

_DOCS_AFTER: Final[str] = """/// Configuration for network operations
///
/// # Examples
///
/// ```
/// let config = Configuration::new(
///     Duration::from_secs(30),
///     3
/// )?;
/// ```
pub struct Configuration {
    timeout: Duration,
    retries: u32,
}"""

FIX_EXAMPLES: Final[dict[tuple[CategoryType, str], FixExample]] = {
    (CategoryType.PERFORMANCE, "Locking"): FixExample(
        description="Efficient locking patterns",
        before=_LOCKING_BEFORE,
        after=_LOCKING_AFTER,
        explanation="Minimize lock duration and consider alternative synchronization primitives",
        additional_notes=(
            "Use RwLock for read-heavy workloads",
            "Consider lock-free data structures",
            "Minimize critical section size",
        ),
    ),
    (CategoryType.DOCUMENTATION, "Missing"): FixExample(
        description="Documentation examples",
        before=_DOCS_BEFORE,
        after=_DOCS_AFTER,
        explanation="Add comprehensive examples to documentation",
        additional_notes=(
            "Include practical usage examples",
            "Show error handling",
            "Demonstrate common use cases",
        ),
    ),
}


def get_fix_example(warning: Warning) -> FixExample | None:
    """Return the worked example for the warning's category and first word, if any."""
    return FIX_EXAMPLES.get((warning.category_type, first_token(warning.message)))


__all__ = ["FIX_EXAMPLES", "FixExample", "get_fix_example"]
