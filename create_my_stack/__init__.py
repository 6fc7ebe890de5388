"""create-my-stack: CLI generator for fullstack boilerplate projects."""

__version__ = "1.0.0"
