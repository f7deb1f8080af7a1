"""taskcomp - shell completion suggestions for a build/task runner.

Given a partially typed command line and a cursor position, computes the
words a shell should offer next: global flags, task names, task flags or
configured network names. The project configuration is loaded asynchronously
and any failure results in no suggestions rather than an error.
"""
