"""
tests/conftest.py - pytest 공통 픽스처

NIM 명령(lsnim, c_rsh, oslevel) 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(fake_runner, nim_estate):
        # fake_runner: 빈 FakeRunner (응답을 직접 등록)
        # nim_estate: 마스터 1대, 클라이언트 2대, VIOS 1대, 리소스가 등록된 FakeRunner
        pass
"""

import sys
import threading
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.config import Settings  # noqa: E402
from core.exceptions import CommandExecutionError  # noqa: E402
from core.shell import CommandResult  # noqa: E402

# =============================================================================
# 샘플 출력
# =============================================================================

MASTER_NIMINFO = """\
#------------------ Network Install Manager ---------------
# warning - this file contains NIM configuration information
#       and should only be updated by NIM
export NIM_NAME=master
export NIM_CONFIGURATION=master
export NIM_MASTER_PORT=1058
export NIM_REGISTRATION_PORT=1059
export NIM_MASTER_HOSTNAME=nimmaster.example.com
export NIM_HOSTNAME=nimmaster.example.com
"""

CLIENT_NIMINFO = """\
#------------------ Network Install Manager ---------------
export NIM_NAME={name}
export NIM_HOSTNAME={name}.example.com
export NIM_CONFIGURATION=standalone
export NIM_MASTER_HOSTNAME=nimmaster.example.com
export NIM_MASTER_PORT=1058
export NIM_SHELL="nimsh"
export NIM_HOSTS=" 10.0.0.1:nimmaster.example.com 10.0.0.5:{name}.example.com "
export NIM_MOUNTS=""
export ROUTES=" default:0:10.0.0.254 "
"""

LSNIM_MACHINE = """\
{name}:
   class          = machines
   type           = {type}
   connect        = nimsh
   platform       = chrp
   netboot_kernel = 64
   if1            = net_10_0_0 {name} 0
   cable_type1    = N/A
   Cstate         = ready for a NIM operation
   prev_state     = ready for a NIM operation
   Mstate         = currently running
"""

LSNIM_RESOURCE = """\
{name}:
   class       = resources
   type        = {type}
   arch        = power
   Rstate      = ready for use
   prev_state  = unavailable for use
   location    = /export/nim/{type}/{name}
   simages     = yes
   alloc_count = 0
   server      = master
"""


# =============================================================================
# 가짜 명령 실행기
# =============================================================================


class FakeRunner:
    """CommandRunner 모킹

    argv 튜플별로 표준 출력 문자열 또는 발생시킬 예외를 등록합니다.
    등록되지 않은 명령은 종료 코드 1의 CommandExecutionError를 발생시킵니다.
    """

    def __init__(self, settings=None):
        self.settings = settings or Settings()
        self.responses = {}
        self.calls = []
        self._lock = threading.Lock()

    def add(self, argv, stdout="", error=None):
        self.responses[tuple(argv)] = error if error is not None else stdout
        return self

    def add_remote(self, host, command, stdout="", error=None):
        return self.add([self.settings.C_RSH_PATH, host, command], stdout, error)

    def add_listing(self, object_type, names, error=None):
        stdout = "".join(f"{name}    machines    {object_type}\n" for name in names)
        return self.add([self.settings.LSNIM_PATH, "-t", object_type], stdout, error)

    def add_attributes(self, name, stdout="", error=None):
        return self.add([self.settings.LSNIM_PATH, "-l", name], stdout, error)

    def add_host(self, name, object_type="standalone", oslevel="7200-05-03-2148"):
        self.add_remote(name, self.settings.REMOTE_NIMINFO_COMMAND, CLIENT_NIMINFO.format(name=name))
        self.add_remote(name, self.settings.OSLEVEL_COMMAND, f"{oslevel}\n")
        self.add_attributes(name, LSNIM_MACHINE.format(name=name, type=object_type))
        return self

    def add_resource(self, name, object_type):
        return self.add_attributes(name, LSNIM_RESOURCE.format(name=name, type=object_type))

    def calls_for(self, argv):
        return [call for call in self.calls if call[0] == tuple(argv)]

    def __call__(self, argv, timeout=None):
        key = tuple(argv)
        with self._lock:
            self.calls.append((key, timeout))

        if key not in self.responses:
            raise CommandExecutionError(argv, 1, stderr="unexpected command")

        response = self.responses[key]
        if isinstance(response, BaseException):
            raise response
        return CommandResult(stdout=response)


# =============================================================================
# 픽스처
# =============================================================================


@pytest.fixture
def nim_settings():
    """테스트용 설정 (짧은 타임아웃, 적은 워커)"""
    return Settings(REMOTE_TIMEOUT=5, MAX_WORKERS=4)


@pytest.fixture
def fake_runner(nim_settings):
    """응답이 비어있는 FakeRunner"""
    return FakeRunner(nim_settings)


@pytest.fixture
def master_niminfo(tmp_path):
    """NIM 마스터 niminfo 파일 경로"""
    path = tmp_path / "niminfo"
    path.write_text(MASTER_NIMINFO, encoding="utf-8")
    return path


@pytest.fixture
def client_niminfo(tmp_path):
    """standalone 클라이언트 niminfo 파일 경로"""
    path = tmp_path / "niminfo"
    path.write_text(CLIENT_NIMINFO.format(name="client9"), encoding="utf-8")
    return path


@pytest.fixture
def nim_estate(fake_runner, nim_settings):
    """마스터 + 클라이언트 2대 + VIOS 1대 + 리소스가 등록된 FakeRunner"""
    fake_runner.add(nim_settings.OSLEVEL_COMMAND.split(), "7200-05-04-2220\n")

    fake_runner.add_listing("standalone", ["client2", "client1"])
    fake_runner.add_host("client1")
    fake_runner.add_host("client2", oslevel="7100-05-06-2015")

    fake_runner.add_listing("vios", ["vios1"])
    fake_runner.add_host("vios1", object_type="vios", oslevel="3.1.2.10")

    fake_runner.add_listing("lpp_source", ["lpp7200", "lpp7100"])
    fake_runner.add_resource("lpp7200", "lpp_source")
    fake_runner.add_resource("lpp7100", "lpp_source")

    fake_runner.add_listing("spot", ["spot7200"])
    fake_runner.add_resource("spot7200", "spot")

    fake_runner.add_listing("mksysb", [])

    return fake_runner
