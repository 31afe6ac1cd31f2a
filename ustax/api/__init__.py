"""HTTP API 모듈"""
