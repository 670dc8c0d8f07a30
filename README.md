# linedispatch

`linedispatch` runs a parent process that hands random lines of a text file
to a pool of child processes. A command script decides at which loop of the
parent each child is started or stopped.

## How it works

The parent first indexes the text, so any line can be read later without
scanning the lines before it. Lines longer than 255 bytes are split into
several entries. The parent then counts loops, starting from 0. On each loop
it:

1. runs every command whose loop number has been reached;
2. if at least one child is active, picks a random line and a random active
   child, writes the line to its sent log, hands the line to that child and
   waits for the child to confirm receipt;
3. moves on to the next loop.

Lines are passed through a shared buffer of 1024 bytes, so a longer line is
truncated to 1023 bytes.

Each child appends every line it receives to the child log. When it is told
to stop, it prints how many messages it received and for how many loops it
was alive, for example:

```
Process 2 terminated - Total messages received-> 17 - Total Loops->40
```

## Command script

Each line of the script holds a loop number followed by a command; blank
lines are skipped:

```
0 C1 S
25 C2 S
40 C1 T
100 EXIT
```

- `<loop> C<n> S` starts child `n`, unless it is already running.
- `<loop> C<n> <other>` stops child `n`, if it is running. The parent stops
  with an error if the child exits with a failure.
- `<loop> E...` (for example `EXIT`) stops every running child, one after
  another, and ends the parent.

Commands are read in order and each one waits until the parent reaches its
loop number. A script that ends without an exit command is an error: the
running children are stopped and the parent reports it.

Child numbers in the script are shifted by the adjustment (`--adjust`, 1 by
default) to give the child's index, so with the default the children are
numbered from `C1`; use `--adjust 0` for scripts that number them from `C0`.
A child number outside the pool is an error.

## Running

Install the package and start the parent:

```
pip install .
linedispatch --book Data/mobydick.txt --config Data/config_10_10000.txt
```

Options:

| Option        | Default                      | Meaning                                     |
|---------------|------------------------------|---------------------------------------------|
| `--book`      | `Data/mobydick.txt`          | text whose lines are handed out             |
| `--config`    | `Data/config_10_10000.txt`   | command script                              |
| `--sent-log`  | `Data/sentlinespar.txt`      | log of lines sent by the parent (rewritten) |
| `--child-log` | `Data/sentlineschild.txt`    | log of lines received by the children (emptied at start) |
| `--consumers` | `10`                         | size of the child pool                      |
| `--adjust`    | `1`                          | offset between script numbers and indexes   |
| `--seed`      | none                         | seed for the random choices                 |

The command exits with status 0 once every child has stopped, and with
status 1 after printing a message if a file cannot be read, the script is
malformed or a child fails.

## Using it from Python

- `linedispatch.config`: `parse_command` turns one line into a `Command`
  (`loop`, `action`, `child`), with `Action.SPAWN`, `Action.TERMINATE` or
  `Action.EXIT`; `read_commands` yields commands from an iterable of lines.
  Malformed input raises `ConfigError`, a `ValueError`.
- `linedispatch.channel`: `Settings` holds the default limits and file
  locations; `Channel` carries lines, termination requests, acknowledgements
  and the loop counter between the parent and its children. It is built on
  `multiprocessing` and takes an optional `context` and a `timeout` after
  which waiting raises `TimeoutError`.
- `linedispatch.child`: `run_child` serves one child until it is told to stop
  and returns a `ChildReport`; `child_main` also prints the report and
  confirms the exit.
- `linedispatch.parent`: `LineIndex` gives random access to the lines of a
  file; `Dispatcher` spawns, feeds and terminates children (`spawn`,
  `terminate`, `dispatch_random_line`, `shutdown`) and `run` executes a
  sequence of commands, returning the loop at which the exit fell due.
  `main` is the command-line entry point.

## What it does not do

The package ships no sample text or command script; the default paths under
`Data/` must be supplied by you. Children are processes started from the
parent through `multiprocessing`; there is no separate command for running a
child on its own.

## Tests

```
pip install ".[test]"
pytest
```