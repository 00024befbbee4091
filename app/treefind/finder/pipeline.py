"""Per-entry criteria interpreter.

The configured criteria are scanned strictly left to right for every
entry:

- a predicate that holds sets the match state and the scan continues;
- a predicate that fails ends the scan at once, so nothing to its right
  runs for this entry, actions included;
- an action runs as soon as the scan reaches it, whatever the predicates
  further right will say.

The match state starts out true only for an empty criteria list. When
the list holds no action at all, a matching entry is printed.
"""

from collections.abc import Sequence

from treefind.finder.actions import ActionExecutor
from treefind.finder.criteria import Criterion, ListAction, PrintAction, has_action
from treefind.finder.models import Entry
from treefind.finder.predicates import evaluate
from treefind.finder.principals import PrincipalLookup


class EntryPipeline:
    """Evaluates the criteria list against entries and runs actions.

    Args:
        criteria: Ordered criteria list, shared read-only across the run.
        executor: Performs output actions.
        principals: Resolver used by owner predicates.
    """

    def __init__(
        self,
        criteria: Sequence[Criterion],
        executor: ActionExecutor,
        principals: PrincipalLookup,
    ) -> None:
        self._criteria = tuple(criteria)
        self._executor = executor
        self._principals = principals
        self._print_on_match = not has_action(self._criteria)

    def process(self, entry: Entry) -> bool:
        """Run the criteria list for one entry.

        Args:
            entry: Snapshot of the visited path.

        Returns:
            The final match state for the entry.
        """
        matched = not self._criteria

        for criterion in self._criteria:
            if isinstance(criterion, PrintAction | ListAction):
                self._executor.run(criterion, entry)
                continue
            if not evaluate(criterion, entry, self._principals):
                return False
            matched = True

        if matched and self._print_on_match:
            self._executor.print_path(entry)
        return matched
