"""
酒店预订数据服务
客人、房间、预订、支付、附加服务与员工的关系模型及其一致性规则
"""
__version__ = "1.0.0"
