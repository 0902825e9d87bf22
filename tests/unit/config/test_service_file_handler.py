"""Unit tests for reading the stepFunctions section of the service file."""

import pytest
import yaml

from stepf_deploy.config.service_file.service_file_handler import ServiceFileHandler
from stepf_deploy.exceptions import ServiceFileError


class TestServiceFileHandler:
    def test_no_service_path_is_a_noop(self):
        handler = ServiceFileHandler(None)

        assert handler.resolve_path() is None
        assert handler.load() == {}
        assert handler.get_step_functions() is None

    def test_reads_step_functions(self, service_dir, order_flow_definition):
        step_functions = ServiceFileHandler(str(service_dir)).get_step_functions()

        assert step_functions == {"OrderFlow": order_flow_definition}

    def test_yml_wins_over_yaml(self, temp_dir):
        (temp_dir / "serverless.yml").write_text("stepFunctions:\n  FromYml: {}\n")
        (temp_dir / "serverless.yaml").write_text("stepFunctions:\n  FromYaml: {}\n")

        handler = ServiceFileHandler(str(temp_dir))

        assert handler.resolve_path() == str(temp_dir / "serverless.yml")
        assert list(handler.get_step_functions()) == ["FromYml"]

    def test_falls_back_to_yaml(self, temp_dir):
        (temp_dir / "serverless.yaml").write_text("stepFunctions:\n  FromYaml: {}\n")

        assert list(ServiceFileHandler(str(temp_dir)).get_step_functions()) == ["FromYaml"]

    def test_missing_file_propagates(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            ServiceFileHandler(str(temp_dir)).get_step_functions()

    def test_missing_section(self, temp_dir):
        (temp_dir / "serverless.yml").write_text("service: orders\n")

        assert ServiceFileHandler(str(temp_dir)).get_step_functions() is None

    def test_empty_file(self, temp_dir):
        (temp_dir / "serverless.yml").write_text("")

        assert ServiceFileHandler(str(temp_dir)).get_step_functions() is None

    def test_invalid_yaml_propagates(self, temp_dir):
        (temp_dir / "serverless.yml").write_text("stepFunctions: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            ServiceFileHandler(str(temp_dir)).load()

    def test_non_mapping_document(self, temp_dir):
        (temp_dir / "serverless.yml").write_text("- just\n- a list\n")

        with pytest.raises(ServiceFileError):
            ServiceFileHandler(str(temp_dir)).load()

    def test_non_mapping_step_functions(self, temp_dir):
        (temp_dir / "serverless.yml").write_text("stepFunctions:\n  - OrderFlow\n")

        with pytest.raises(ServiceFileError):
            ServiceFileHandler(str(temp_dir)).get_step_functions()


class TestServiceFileScalars:
    def test_timestamps_stay_strings(self, temp_dir):
        (temp_dir / "serverless.yml").write_text(
            "stepFunctions:\n"
            "  Cutoff:\n"
            "    StartAt: Check\n"
            "    States:\n"
            "      Check:\n"
            "        Type: Choice\n"
            "        Choices:\n"
            "          - Variable: $.when\n"
            "            TimestampEquals: 2016-03-14T01:59:00Z\n"
            "            Next: Done\n"
            "        Default: Done\n"
            "      Done:\n"
            "        Type: Succeed\n"
        )

        choice = ServiceFileHandler(str(temp_dir)).get_step_functions()["Cutoff"]["States"]["Check"]["Choices"][0]

        assert choice["TimestampEquals"] == "2016-03-14T01:59:00Z"

    def test_yaml_1_1_booleans_stay_strings(self, temp_dir):
        (temp_dir / "serverless.yml").write_text(
            "stepFunctions:\n"
            "  Approval:\n"
            "    StartAt: Yes\n"
            "    States:\n"
            "      Yes:\n"
            "        Type: Pass\n"
            "        Result: on\n"
            "        Next: No\n"
            "      No:\n"
            "        Type: Succeed\n"
        )

        definition = ServiceFileHandler(str(temp_dir)).get_step_functions()["Approval"]

        assert definition["StartAt"] == "Yes"
        assert set(definition["States"]) == {"Yes", "No"}
        assert definition["States"]["Yes"]["Result"] == "on"
        assert definition["States"]["Yes"]["Next"] == "No"

    def test_true_and_false_are_booleans(self, temp_dir):
        (temp_dir / "serverless.yml").write_text(
            "stepFunctions:\n"
            "  Flags:\n"
            "    States:\n"
            "      Done:\n"
            "        Type: Pass\n"
            "        End: true\n"
            "        Result: False\n"
        )

        state = ServiceFileHandler(str(temp_dir)).get_step_functions()["Flags"]["States"]["Done"]

        assert state["End"] is True
        assert state["Result"] is False

    def test_numbers_still_resolve(self, temp_dir):
        (temp_dir / "serverless.yml").write_text(
            "stepFunctions:\n  Wait:\n    States:\n      Pause:\n        Type: Wait\n        Seconds: 10\n"
        )

        assert ServiceFileHandler(str(temp_dir)).get_step_functions()["Wait"]["States"]["Pause"]["Seconds"] == 10
