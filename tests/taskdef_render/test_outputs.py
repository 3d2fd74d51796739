import io

from taskdef_render.outputs import report_failure, set_outputs


def test_outputs_appended_to_github_output_file(tmp_path):
    out = tmp_path / "output"
    out.write_text("existing=1\n")
    set_outputs({"task-definition": "/tmp/td.json", "container-definition-name": "web,sidecar"},
                environ={"GITHUB_OUTPUT": str(out)})
    assert out.read_text() == (
        "existing=1\ntask-definition=/tmp/td.json\ncontainer-definition-name=web,sidecar\n"
    )


def test_outputs_printed_without_output_file():
    stream = io.StringIO()
    set_outputs({"task-definition": "/tmp/td.json"}, environ={}, stream=stream)
    assert stream.getvalue() == "task-definition=/tmp/td.json\n"


def test_report_failure_only_under_actions(capsys):
    report_failure("no services", environ={})
    assert capsys.readouterr().out == ""
    report_failure("no services", environ={"GITHUB_ACTIONS": "true"})
    assert capsys.readouterr().out == "::error::no services\n"
