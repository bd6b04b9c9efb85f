import abc
import argparse

from quiz_tutor.web.config import AppConfig


def non_negative_int(value: str) -> int:
    """argparse ``type=`` for counts such as retry budgets."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected an integer, got {value!r}"
        ) from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


class CLICommand(abc.ABC):
    """A ``quiz-tutor`` sub-command.

    Subclasses set ``name`` and ``help``, declare their options in
    :meth:`add_arguments` and do the work in :meth:`run`.
    """

    name: str
    help: str = ""

    def should_run(self, args: argparse.Namespace) -> bool:
        return args.command == self.name

    def register_subparser(self, subparsers: argparse._SubParsersAction) -> None:
        parser = subparsers.add_parser(self.name, help=self.help)
        self.add_arguments(parser)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        pass

    @abc.abstractmethod
    def run(self, args: argparse.Namespace, config: AppConfig) -> None:
        pass
