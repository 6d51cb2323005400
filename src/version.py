# coding=utf-8
# https://github.com/calllivecn

VERSION = "v1.0.0"
