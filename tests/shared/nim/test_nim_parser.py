"""
tests/shared/nim/test_nim_parser.py - shared/nim/parser.py 테스트
"""

import io

import pytest

from shared.nim.parser import is_list_key, nim_attributes_to_dict, niminfo_to_dict, niminfo_to_lines


class TestNiminfoToDict:
    """niminfo_to_dict 테스트"""

    def test_scenario_name_and_routes(self):
        """NAME은 스칼라, ROUTES는 리스트"""
        text = 'export NIM_NAME=foo\nexport NIM_ROUTES="10.0.0.1 10.0.0.2"\n'

        assert niminfo_to_dict(text) == {"name": "foo", "routes": ["10.0.0.1", "10.0.0.2"]}

    def test_skips_comments_and_blank_lines(self):
        """주석, 빈 줄, export가 아닌 줄은 무시"""
        text = "#---- Network Install Manager ----\n\n# export NIM_NAME=commented\nNIM_NAME=noexport\nexport NIM_NAME=real\n"

        assert niminfo_to_dict(text) == {"name": "real"}

    def test_removes_every_nim_prefix_occurrence(self):
        """NIM_는 접두사뿐 아니라 모든 위치에서 제거"""
        result = niminfo_to_dict("export NIM_MASTER_NIM_PORT=1058\n")

        assert result == {"master_port": "1058"}

    def test_key_without_nim_prefix(self):
        """NIM_ 접두사가 없는 키도 소문자로 변환"""
        assert niminfo_to_dict("export ROUTES=default:0:10.0.0.254\n") == {"routes": ["default:0:10.0.0.254"]}

    def test_lowercase_key_does_not_match(self):
        """키는 대문자와 밑줄만 허용"""
        assert niminfo_to_dict("export nim_name=foo\nexport NIM_NAME2=bar\n") == {}

    def test_removes_double_quotes_from_value(self):
        """값의 큰따옴표 전부 제거"""
        assert niminfo_to_dict('export NIM_SHELL="nimsh"\n') == {"shell": "nimsh"}

    def test_value_keeps_equals_sign(self):
        """값 안의 '='은 그대로 유지"""
        assert niminfo_to_dict("export NIM_BOS_OPTS=a=b\n") == {"bos_opts": "a=b"}

    @pytest.mark.parametrize(
        "line,key,expected",
        [
            ('export NIM_MOUNTS=""', "mounts", []),
            ("export NIM_HOSTS=single", "hosts", ["single"]),
            ('export NIM_HOSTS=" 10.0.0.1:a  10.0.0.2:b "', "hosts", ["10.0.0.1:a", "10.0.0.2:b"]),
            ("export NIM_STATIC_ROUTES=x y", "static_routes", ["x", "y"]),
        ],
    )
    def test_list_keys_always_lists(self, line, key, expected):
        """hosts/routes/mounts 포함 키는 토큰 수와 무관하게 리스트"""
        assert niminfo_to_dict(line + "\n")[key] == expected

    def test_other_keys_always_scalar(self):
        """그 외 키는 공백이 있어도 문자열"""
        result = niminfo_to_dict('export NIM_HOSTNAME=client1.example.com\nexport NIM_BOS_IMAGE="a b"\n')

        assert result == {"hostname": "client1.example.com", "bos_image": "a b"}

    def test_accepts_file_like_stream(self):
        """열린 파일(줄 iterable)도 입력 가능"""
        stream = io.StringIO("export NIM_NAME=client1\r\nexport NIM_CONFIGURATION=standalone\n")

        assert niminfo_to_dict(stream) == {"name": "client1", "configuration": "standalone"}

    def test_later_duplicate_key_wins(self):
        """같은 키가 반복되면 마지막 값 사용"""
        assert niminfo_to_dict("export NIM_NAME=a\nexport NIM_NAME=b\n") == {"name": "b"}

    def test_empty_input(self):
        assert niminfo_to_dict("") == {}


class TestNiminfoRoundTrip:
    """niminfo_to_lines 재직렬화 후 재파싱 테스트"""

    def test_reparse_yields_equal_map(self):
        """재직렬화한 줄을 다시 파싱하면 같은 dict"""
        text = (
            "export NIM_NAME=client1\n"
            "export NIM_CONFIGURATION=standalone\n"
            'export NIM_HOSTS=" 10.0.0.1:master 10.0.0.5:client1 "\n'
            'export NIM_MOUNTS=""\n'
            "export NIM_ROUTES=default:0:10.0.0.254\n"
            'export NIM_BOS_IMAGE="with space"\n'
        )
        parsed = niminfo_to_dict(text)

        assert niminfo_to_dict(niminfo_to_lines(parsed)) == parsed

    def test_lines_format(self):
        """export NIM_<KEY>=<VALUE> 형식"""
        lines = niminfo_to_lines({"name": "foo", "routes": ["a", "b"]})

        assert lines == ["export NIM_NAME=foo", 'export NIM_ROUTES="a b"']

    @pytest.mark.parametrize(
        "line",
        ["export NNIM_IM_=x", "export NIM_=x", "export NIM_NIM_NAME=x", "export NIM_XNIM_IM_=x"],
    )
    def test_keys_containing_nim_reparse(self, line):
        """NIM_ 제거 후에도 nim_이 남는 키도 같은 dict로 재파싱"""
        parsed = niminfo_to_dict(line)

        assert niminfo_to_dict(niminfo_to_lines(parsed)) == parsed

    def test_nim_key_encoding(self):
        assert niminfo_to_lines({"nim_": "x"}) == ["export NIM_NNIM_IM_=x"]


class TestNimAttributesToDict:
    """nim_attributes_to_dict 테스트"""

    def test_parses_indented_lines(self):
        """헤더는 건너뛰고 들여쓰기된 key = value만 파싱"""
        text = "client1:\n   class          = machines\n   platform       = chrp\n"

        assert nim_attributes_to_dict(text) == {"class": "machines", "platform": "chrp"}

    def test_splits_on_first_equals_only(self):
        """값 안의 '='은 유지"""
        result = nim_attributes_to_dict("spot1:\n   comments = a=b\n")

        assert result == {"comments": "a=b"}

    def test_tab_indented_line(self):
        assert nim_attributes_to_dict("\tlocation = /export/spot\n") == {"location": "/export/spot"}

    def test_line_without_equals(self):
        """'='이 없는 들여쓰기 줄은 빈 값"""
        assert nim_attributes_to_dict("x:\n   orphan\n") == {"orphan": ""}

    def test_values_with_spaces_preserved(self):
        result = nim_attributes_to_dict("client1:\n   Cstate = ready for a NIM operation\n")

        assert result == {"Cstate": "ready for a NIM operation"}

    def test_unindented_lines_skipped(self):
        assert nim_attributes_to_dict("header:\nkey = value\n") == {}


class TestIsListKey:
    """is_list_key 테스트"""

    @pytest.mark.parametrize("key", ["hosts", "routes", "mounts", "static_routes", "nfs_mounts"])
    def test_list_keys(self, key):
        assert is_list_key(key) is True

    @pytest.mark.parametrize("key", ["hostname", "master_hostname", "name", "route"])
    def test_scalar_keys(self, key):
        assert is_list_key(key) is False
