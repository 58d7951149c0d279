from ontovault.cli.commands.generate_command import GenerateCommand

__all__ = ["GenerateCommand"]
