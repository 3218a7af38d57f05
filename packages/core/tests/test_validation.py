"""请求校验层测试

测试内容：
1. 创建请求：全部违反项一次性收集
2. 清洗：去除尖括号并 trim
3. 状态更新：布尔 / 字符串两种输入解码
4. id 与查询参数校验
"""

import pytest
from taskboard.core.exceptions import ValidationError
from taskboard.core.models import SortField, TaskPriority, TaskStatus
from taskboard.core.validation import (
    DESCRIPTION_NOT_STRING,
    DESCRIPTION_TOO_LONG,
    PRIORITY_FILTER_INVALID,
    PRIORITY_INVALID,
    SORT_FIELD_INVALID,
    STATUS_FILTER_INVALID,
    STATUS_INVALID,
    STATUS_REQUIRED,
    TASK_ID_INVALID,
    TITLE_REQUIRED,
    TITLE_TOO_LONG,
    decode_status,
    sanitize_text,
    validate_create_task,
    validate_status_update,
    validate_task_id,
    validate_task_query,
)

VALID_ID = "task_1703123456789_abc123def"


class TestSanitize:
    def test_strips_angle_brackets_and_whitespace(self):
        assert sanitize_text("  <b>Buy</b> milk  ") == "bBuy/b milk"

    def test_plain_text_untouched(self):
        assert sanitize_text("Buy milk") == "Buy milk"


class TestValidateCreateTask:
    def test_minimal_payload_gets_defaults(self):
        command = validate_create_task({"title": "Buy milk"})
        assert command.title == "Buy milk"
        assert command.description == ""
        assert command.priority == TaskPriority.MEDIUM

    def test_full_payload_is_sanitized(self):
        command = validate_create_task(
            {"title": "  <script>x</script> ", "description": " <i>d</i> ", "priority": "high"}
        )
        assert command.title == "scriptx/script"
        assert command.description == "id/i"
        assert command.priority == TaskPriority.HIGH

    def test_missing_title_and_bad_priority_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_task({"description": "x", "priority": "bogus"})
        assert exc_info.value.details == [TITLE_REQUIRED, PRIORITY_INVALID]
        assert exc_info.value.message == "Invalid input data"

    def test_all_rules_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_task({"title": "x" * 201, "description": 5, "priority": None})
        assert exc_info.value.details == [TITLE_TOO_LONG, DESCRIPTION_NOT_STRING, PRIORITY_INVALID]

    @pytest.mark.parametrize("title", [None, "", "   ", "<>", 42, ["a"]])
    def test_title_required(self, title):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_task({"title": title})
        assert exc_info.value.details == [TITLE_REQUIRED]

    def test_title_length_counted_after_trim(self):
        command = validate_create_task({"title": "  " + "x" * 200 + "  "})
        assert len(command.title) == 200

    def test_description_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_task({"title": "t", "description": "d" * 1001})
        assert exc_info.value.details == [DESCRIPTION_TOO_LONG]

    def test_description_at_limit_accepted(self):
        command = validate_create_task({"title": "t", "description": "d" * 1000})
        assert len(command.description) == 1000

    def test_null_description_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_task({"title": "t", "description": None})
        assert exc_info.value.details == [DESCRIPTION_NOT_STRING]

    def test_empty_payload(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_task({})
        assert exc_info.value.details == [TITLE_REQUIRED]


class TestDecodeStatus:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, True), (False, False), ("completed", True), ("pending", False)],
    )
    def test_accepted_forms(self, value, expected):
        assert decode_status(value) is expected

    @pytest.mark.parametrize("value", ["done", "COMPLETED", 1, 0, [], {}])
    def test_rejected_forms(self, value):
        with pytest.raises(ValueError, match="Status must be a boolean"):
            decode_status(value)


class TestValidateStatusUpdate:
    def test_boolean(self):
        command = validate_status_update(VALID_ID, {"status": True})
        assert command.task_id == VALID_ID
        assert command.completed is True

    def test_string(self):
        command = validate_status_update(VALID_ID, {"status": "pending"})
        assert command.completed is False

    def test_missing_status(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_status_update(VALID_ID, {})
        assert exc_info.value.details == [STATUS_REQUIRED]

    def test_bad_id_and_bad_status_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_status_update("not-an-id", {"status": "done"})
        assert exc_info.value.details == [TASK_ID_INVALID, STATUS_INVALID]


class TestValidateTaskId:
    def test_valid(self):
        assert validate_task_id(VALID_ID) == VALID_ID

    def test_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_task_id("123")
        assert exc_info.value.message == TASK_ID_INVALID
        assert exc_info.value.details == ["Task ID must be in the correct format"]


class TestValidateTaskQuery:
    def test_empty(self):
        query = validate_task_query({})
        assert query.status is None and query.priority is None and query.sort_by is None

    def test_empty_strings_are_absent(self):
        query = validate_task_query({"status": "", "priority": "", "sortBy": ""})
        assert query.status is None and query.priority is None and query.sort_by is None

    def test_all_fields(self):
        query = validate_task_query(
            {"status": "completed", "priority": "high", "sortBy": "createdAt"}
        )
        assert query.status == TaskStatus.COMPLETED
        assert query.priority == TaskPriority.HIGH
        assert query.sort_by == SortField.CREATED_AT

    def test_all_violations_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_task_query({"status": "done", "priority": "urgent", "sortBy": "id"})
        assert exc_info.value.message == "Invalid query parameters"
        assert exc_info.value.details == [
            STATUS_FILTER_INVALID,
            PRIORITY_FILTER_INVALID,
            SORT_FIELD_INVALID,
        ]


class TestValidationError:
    def test_requires_details(self):
        with pytest.raises(ValueError):
            ValidationError([])
