"""
tests/core/data/network/test_services_elb.py - 로드밸런서 수집 테스트
"""

from unittest.mock import MagicMock

from core.data.network.services.elb import (
    TAG_BATCH_SIZE,
    collect_classic_load_balancers,
    collect_elbv2_load_balancers,
    collect_load_balancers,
    parse_scheme,
)
from core.data.network.types import LoadBalancerScheme, LoadBalancerType

VPC_ID = "vpc-1"


def _arn(name: str) -> str:
    return f"arn:aws:elasticloadbalancing:ap-northeast-2:123456789012:loadbalancer/net/{name}/abc"


def _elbv2_client(paginator, load_balancers, listeners=None):
    client = MagicMock()
    pages = {
        "describe_load_balancers": paginator([{"LoadBalancers": load_balancers}]),
        "describe_listeners": paginator([{"Listeners": listeners or []}]),
    }
    client.get_paginator.side_effect = lambda name: pages[name]
    client.describe_tags.side_effect = lambda ResourceArns: {
        "TagDescriptions": [{"ResourceArn": arn, "Tags": [{"Key": "Owner", "Value": "team"}]} for arn in ResourceArns]
    }
    return client


class TestParseScheme:
    """scheme 매핑 테스트"""

    def test_values(self):
        """internet-facing 외에는 internal"""
        assert parse_scheme("internet-facing") == LoadBalancerScheme.INTERNET_FACING
        assert parse_scheme("internal") == LoadBalancerScheme.INTERNAL
        assert parse_scheme(None) == LoadBalancerScheme.INTERNAL


class TestElbv2:
    """ELBv2 수집 테스트"""

    def test_filters_by_vpc(self, paginator):
        """다른 VPC의 로드밸런서는 제외"""
        client = _elbv2_client(
            paginator,
            [
                {
                    "LoadBalancerArn": _arn("router"),
                    "LoadBalancerName": "router",
                    "Type": "network",
                    "Scheme": "internet-facing",
                    "VpcId": VPC_ID,
                    "AvailabilityZones": [{"SubnetId": "subnet-a"}, {"SubnetId": "subnet-c"}],
                },
                {"LoadBalancerArn": _arn("other"), "LoadBalancerName": "other", "VpcId": "vpc-other"},
            ],
            listeners=[{"Port": 443}, {"Port": 80}, {"Port": 443}],
        )

        lbs = collect_elbv2_load_balancers(client, VPC_ID)

        assert len(lbs) == 1
        lb = lbs[0]
        assert lb.lb_id == _arn("router")
        assert lb.lb_type == LoadBalancerType.NETWORK
        assert lb.is_internet_facing
        assert lb.subnet_ids == ("subnet-a", "subnet-c")
        assert lb.listener_ports == (80, 443)
        assert lb.tags == {"Owner": "team"}

    def test_no_load_balancers(self, paginator):
        """대상이 없으면 태그 조회 생략"""
        client = _elbv2_client(paginator, [])

        assert collect_elbv2_load_balancers(client, VPC_ID) == []
        client.describe_tags.assert_not_called()

    def test_tag_batches(self, paginator):
        """describe_tags는 최대 20개씩"""
        raw = [{"LoadBalancerArn": _arn(f"lb{i}"), "LoadBalancerName": f"lb{i}", "VpcId": VPC_ID} for i in range(25)]
        client = _elbv2_client(paginator, raw)

        lbs = collect_elbv2_load_balancers(client, VPC_ID)

        assert len(lbs) == 25
        batch_sizes = [len(c.kwargs["ResourceArns"]) for c in client.describe_tags.call_args_list]
        assert batch_sizes == [TAG_BATCH_SIZE, 5]
        assert all(lb.lb_type == LoadBalancerType.APPLICATION for lb in lbs)


class TestClassic:
    """Classic Load Balancer 수집 테스트"""

    def test_collect(self, paginator):
        """이름이 ID, 서브넷/리스너 포트 매핑"""
        client = MagicMock()
        client.get_paginator.return_value = paginator(
            [
                {
                    "LoadBalancerDescriptions": [
                        {
                            "LoadBalancerName": "legacy",
                            "Scheme": "internal",
                            "VPCId": VPC_ID,
                            "Subnets": ["subnet-b"],
                            "ListenerDescriptions": [{"Listener": {"LoadBalancerPort": 8080}}],
                        },
                        {"LoadBalancerName": "elsewhere", "VPCId": "vpc-other"},
                    ]
                }
            ]
        )
        client.describe_tags.return_value = {"TagDescriptions": [{"LoadBalancerName": "legacy", "Tags": []}]}

        lbs = collect_classic_load_balancers(client, VPC_ID)

        assert len(lbs) == 1
        assert lbs[0].lb_id == "legacy"
        assert lbs[0].lb_type == LoadBalancerType.CLASSIC
        assert lbs[0].scheme == LoadBalancerScheme.INTERNAL
        assert lbs[0].subnet_ids == ("subnet-b",)
        assert lbs[0].listener_ports == (8080,)
        client.describe_tags.assert_called_once_with(LoadBalancerNames=["legacy"])


class TestCollectLoadBalancers:
    """전체 수집 테스트"""

    def test_elbv2_then_classic(self, paginator):
        """ELBv2 먼저, Classic 다음"""
        elbv2 = _elbv2_client(paginator, [{"LoadBalancerArn": _arn("v2"), "LoadBalancerName": "v2", "VpcId": VPC_ID}])
        elb = MagicMock()
        elb.get_paginator.return_value = paginator(
            [{"LoadBalancerDescriptions": [{"LoadBalancerName": "classic", "VPCId": VPC_ID}]}]
        )
        elb.describe_tags.return_value = {"TagDescriptions": []}

        lbs = collect_load_balancers(elb, elbv2, VPC_ID)

        assert [lb.name for lb in lbs] == ["v2", "classic"]
