"""
Pytest fixtures for elb-log-parser tests.
"""

import gzip
from pathlib import Path

import pytest


# A 23-field ALB line and the JSON it converts to, field for field.
ALB_LINE = (
    'h2 2022-11-01T23:50:27.908737Z app/my-alb/1234567890abcdef 123.123.123.123:65432 '
    '10.0.10.0:8080 0.000 0.004 0.000 200 200 288 131 "GET https://example.com HTTP/2.0" '
    '"Mozilla/5.0 (iPhone; CPU iPhone OS 15_6_1 like Mac OS X) AppleWebKit/605.1.15 '
    '(KHTML, like Gecko) Mobile/15E148 MYAPP/4.2.1 iOS/15.6.1 iPhone12,3" '
    'ECDHE-RSA-AES128-GCM-SHA256 TLSv1.2 '
    'arn:aws:elasticloadbalancing:ap-northeast-2:1234567890:targetgroup/mytargetgroup/0123456789abcdef '
    '"Root=1-12345678-01234567890123456789" "example.com" '
    '"arn:aws:acm:ap-northeast-2:1234567890:certificate/abcdefgh-abcd-efgh-ijkl-0123456789" '
    '5 2022-11-01T23:50:27.904000Z "forward"'
)

ALB_JSON = (
    r'{"type":"h2","timestamp":"2022-11-01T23:50:27.908737Z",'
    r'"elb":"app/my-alb/1234567890abcdef","client_port":"123.123.123.123:65432",'
    r'"target_port":"10.0.10.0:8080","request_processing_time":"0.000",'
    r'"target_processing_time":"0.004","response_processing_time":"0.000",'
    r'"elb_status_code":"200","target_status_code":"200","received_bytes":"288",'
    r'"sent_bytes":"131","request":"\"GET https://example.com HTTP/2.0\"",'
    r'"user_agent":"\"Mozilla/5.0 (iPhone; CPU iPhone OS 15_6_1 like Mac OS X) '
    r'AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148 MYAPP/4.2.1 iOS/15.6.1 iPhone12,3\"",'
    r'"ssl_cipher":"ECDHE-RSA-AES128-GCM-SHA256","ssl_protocol":"TLSv1.2",'
    r'"target_group_arn":"arn:aws:elasticloadbalancing:ap-northeast-2:1234567890:targetgroup/mytargetgroup/0123456789abcdef",'
    r'"trace_id":"\"Root=1-12345678-01234567890123456789\"","domain_name":"\"example.com\"",'
    r'"chosen_cert_arn":"\"arn:aws:acm:ap-northeast-2:1234567890:certificate/abcdefgh-abcd-efgh-ijkl-0123456789\"",'
    r'"matched_rule_priority":"5","request_creation_time":"2022-11-01T23:50:27.904000Z",'
    r'"actions_executed":"\"forward\""}'
)

CLASSIC_LB_LINES = [
    '2015-05-13T23:39:43.945958Z my-loadbalancer 192.168.131.39:2817 10.0.0.1:80 0.000073 '
    '0.001048 0.000057 200 200 0 29 "GET http://www.example.com:80/ HTTP/1.1" "curl/7.38.0" - -',
    '2015-05-13T23:39:43.945958Z my-loadbalancer 192.168.131.39:2817 10.0.0.1:80 0.000086 '
    '0.001048 0.001337 200 200 0 57 "GET https://www.example.com:443/ HTTP/1.1" "curl/7.38.0" '
    'DHE-RSA-AES128-SHA TLSv1.2',
    '2015-05-13T23:39:43.945958Z my-loadbalancer 192.168.131.39:2817 10.0.0.1:80 0.001069 '
    '0.000028 0.000041 - - 82 305 "- - - " "-" - -',
]


def alb_line(elb: str = "app/my-alb/1234567890abcdef", status: str = "200") -> str:
    """Build a valid ALB line with a recognizable load balancer name and status."""
    return (
        f'https 2022-11-02T16:16:31.662027Z {elb} 123.123.123.123:54321 - -1 -1 -1 {status} - '
        f'199 184 "GET https://10.100.10.100:443/ HTTP/1.1" "curl/8.0" '
        f'ECDHE-RSA-AES128-GCM-SHA256 TLSv1.2 - "Root=1-abcdefgh" "*" "session-reused" '
        f'0 2022-11-02T16:16:31.661000Z "fixed-response"'
    )


@pytest.fixture
def sample_alb_line() -> str:
    """Documented ALB log line."""
    return ALB_LINE


@pytest.fixture
def sample_alb_json() -> str:
    """JSON expected for the documented ALB log line."""
    return ALB_JSON


@pytest.fixture
def sample_classic_lb_lines() -> list[str]:
    """Classic LB lines for HTTP, HTTPS and TCP listeners."""
    return list(CLASSIC_LB_LINES)


@pytest.fixture
def write_log():
    """Factory writing lines to a log file, optionally gzip-compressed."""

    def write(path: Path, lines: list[str], compress: bool = False) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = "".join(line + "\n" for line in lines).encode("utf-8")
        if compress:
            data = gzip.compress(data)
        path.write_bytes(data)
        return path

    return write


@pytest.fixture
def alb_log_dir(tmp_path, write_log) -> Path:
    """Directory of three ALB logs, one per load balancer name."""
    root = tmp_path / "logs"
    write_log(root / "a.log", [alb_line(elb=f"app/a/{i}") for i in range(5)])
    write_log(root / "b.log.gz", [alb_line(elb=f"app/b/{i}") for i in range(3)], compress=True)
    write_log(root / "c.log", [alb_line(elb=f"app/c/{i}") for i in range(4)])
    return root
