"""
statecell CLI - drive the demo counter container from the command line

Commands:
- statecell run - Dispatch commands through the demo container
- statecell replay - Replay a JSONL command file through the transition function
- statecell version - Show version information
"""
