"""Shared test fixtures"""
import pytest


REGIONS_BEAN = {
    "name": "Hadoop:service=HBase,name=RegionServer,sub=Regions",
    "modelerType": "RegionServer,sub=Regions",
    "tag.Context": "regionserver",
    "tag.Hostname": "rs1.example.com",
    "Namespace_default_table_usertable_region_5f3a9c_metric_readRequestCount": 120,
    "Namespace_default_table_usertable_region_5f3a9c_metric_writeRequestCount": 7,
    "Namespace_default_table_orders_region_77b1d0_metric_readRequestCount": 3,
    "numRegions": 3,
}

JMX_DOCUMENT = {
    "beans": [
        {
            "name": "java.lang:type=Memory",
            "modelerType": "sun.management.MemoryImpl",
            "Verbose": False,
        },
        {
            "name": "Hadoop:service=HBase,name=RegionServer,sub=Server",
            "modelerType": "RegionServer,sub=Server",
            "tag.Context": "regionserver",
            "regionCount": 3,
            "readRequestCount": 123.0,
            "zookeeperQuorum": "zk1:2181",
        },
        REGIONS_BEAN,
    ]
}


@pytest.fixture
def jmx_document():
    return JMX_DOCUMENT


@pytest.fixture
def regions_bean():
    return REGIONS_BEAN
