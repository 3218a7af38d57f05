"""Task ID 生成与校验测试"""

from datetime import UTC, datetime

from taskboard.core.ids import generate_task_id, is_valid_task_id


class TestGenerateTaskId:
    def test_format(self):
        now = datetime(2023, 12, 20, 10, 30, 45, 123000, tzinfo=UTC)
        task_id = generate_task_id(now)
        prefix, millis, suffix = task_id.split("_")
        assert prefix == "task"
        assert millis == str(int(now.timestamp() * 1000))
        assert len(suffix) == 9
        assert suffix.isalnum() and suffix == suffix.lower()

    def test_generated_ids_are_valid(self):
        for _ in range(50):
            assert is_valid_task_id(generate_task_id())

    def test_ids_unique_within_same_millisecond(self):
        now = datetime.now(UTC)
        ids = {generate_task_id(now) for _ in range(500)}
        assert len(ids) == 500


class TestIsValidTaskId:
    def test_valid(self):
        assert is_valid_task_id("task_1703123456789_abc123def")
        assert is_valid_task_id("task_1_a")

    def test_invalid(self):
        for value in (
            "",
            "task_",
            "task_123",
            "task_123_",
            "task_abc_def",
            "task_123_ABC",
            "TASK_123_abc",
            "task_123_abc-def",
            "task_123_abc\n",
            " task_123_abc",
            "123",
        ):
            assert not is_valid_task_id(value), value

    def test_non_string(self):
        assert not is_valid_task_id(None)
        assert not is_valid_task_id(123)
