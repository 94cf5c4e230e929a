"""领域层模型。

包含：
- models: 各 Brain API 端点的响应模型，以及 ClassifiedError 错误分类。
- exceptions: BrainClient 抛出的业务异常类型。
"""
