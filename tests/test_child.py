import threading

from linedispatch.channel import Channel
from linedispatch.child import ChildReport, child_main, run_child


def test_report_text():
    assert str(ChildReport(2, 7, 9)) == (
        "Process 2 terminated - Total messages received-> 7 - Total Loops->9"
    )


def test_run_child_terminated_immediately(tmp_path):
    channel = Channel(2, 64, timeout=5)
    channel.request_termination(0)
    report = run_child(0, channel, tmp_path / "log.txt")
    assert report == ChildReport(0, 0, 0)
    channel.wait_acknowledgement()
    assert (tmp_path / "log.txt").read_text() == ""


def test_child_main_logs_lines_and_reports(tmp_path, capsys):
    channel = Channel(2, 64, timeout=5)
    log = tmp_path / "log.txt"
    results = []
    worker = threading.Thread(
        target=lambda: results.append(child_main(1, channel, log)), daemon=True
    )
    worker.start()
    channel.wait_acknowledgement()
    for text in ["first\n", "second\n"]:
        channel.send(1, text)
        channel.wait_acknowledgement()
        channel.advance_loop()
    channel.advance_loop()
    channel.request_termination(1)
    channel.wait_acknowledgement()
    worker.join(5)

    assert results == [0]
    assert log.read_text() == (
        "Parent sent this line to child 1:\n first\n"
        "Parent sent this line to child 1:\n second\n"
    )
    assert str(ChildReport(1, 2, 3)) in capsys.readouterr().out


def test_child_appends_to_existing_log(tmp_path):
    log = tmp_path / "log.txt"
    log.write_text("earlier\n")
    channel = Channel(1, 64, timeout=5)
    channel.request_termination(0)
    run_child(0, channel, log)
    assert log.read_text() == "earlier\n"